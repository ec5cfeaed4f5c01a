from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.constants import FIRESTORE_BATCH_LIMIT, INSTITUTIONS_COLLECTION
from ..core.enums import InstitutionType

logger = logging.getLogger(__name__)


def institution_collection(client, institution: InstitutionType, name: str):
    """`institutions/{type}/{name}`: every data collection lives under its institution document."""
    return (
        client.collection(INSTITUTIONS_COLLECTION)
        .document(InstitutionType(institution).value)
        .collection(name)
    )


def snapshot_to_dict(snapshot) -> Dict[str, Any]:
    data = dict(snapshot.to_dict() or {})
    data["id"] = snapshot.id
    return data


def where_eq(query, field: str, value: Any):
    return query.where(filter=FieldFilter(field, "==", value))


def where_between(query, field: str, start: Any, end: Any):
    """Inclusive range filter on a single field."""
    query = query.where(filter=FieldFilter(field, ">=", start))
    return query.where(filter=FieldFilter(field, "<=", end))


def write_in_batches(client, writes: Iterable[Tuple[Any, Dict[str, Any]]]) -> int:
    """Apply `(document_ref, data)` sets through batched writes.

    Batches are committed every FIRESTORE_BATCH_LIMIT operations; an earlier
    committed chunk is not rolled back if a later one fails.
    """
    batch = client.batch()
    pending = 0
    total = 0
    for ref, data in writes:
        batch.set(ref, data)
        pending += 1
        total += 1
        if pending == FIRESTORE_BATCH_LIMIT:
            batch.commit()
            batch = client.batch()
            pending = 0
    if pending:
        batch.commit()
    return total


class FirestoreCollectionRepository:
    """Base for repositories bound to one per-institution collection."""

    collection_name: str = ""

    def __init__(self, client):
        self._client = client

    def _collection(self, institution: InstitutionType):
        return institution_collection(self._client, institution, self.collection_name)

    def _stream(self, query) -> List[Dict[str, Any]]:
        return [snapshot_to_dict(s) for s in query.stream()]

    def _list(self, institution: InstitutionType, **equals: Any) -> List[Dict[str, Any]]:
        query = self._collection(institution)
        for field, value in equals.items():
            query = where_eq(query, field, value)
        return self._stream(query)

    def _get(self, institution: InstitutionType, doc_id: str) -> Optional[Dict[str, Any]]:
        snapshot = self._collection(institution).document(doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot_to_dict(snapshot)

    def _add(self, institution: InstitutionType, data: Dict[str, Any]) -> str:
        ref = self._collection(institution).document()
        ref.set(data)
        logger.debug("Created %s/%s in %s", self.collection_name, ref.id, institution.value)
        return ref.id

    def _add_many(self, institution: InstitutionType, rows: Iterable[Dict[str, Any]]) -> List[str]:
        collection = self._collection(institution)
        refs_and_data = [(collection.document(), data) for data in rows]
        write_in_batches(self._client, refs_and_data)
        return [ref.id for ref, _ in refs_and_data]

    def _update(self, institution: InstitutionType, doc_id: str, data: Dict[str, Any]) -> bool:
        try:
            self._collection(institution).document(doc_id).update(data)
        except NotFound:
            return False
        return True

    def _delete(self, institution: InstitutionType, doc_id: str) -> bool:
        ref = self._collection(institution).document(doc_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True
