from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.auth.credentials import AnonymousCredentials

logger = logging.getLogger(__name__)


@dataclass
class FirestoreConfig:
    project_id: str
    credentials_file: str = ""
    emulator_host: str = ""


class FirestoreConnection:
    """Singleton-like Firestore client factory.

    Note: The client is created on first use and shared by every repository.
    """

    _instance: Optional["FirestoreConnection"] = None

    def __init__(self, config: FirestoreConfig):
        self._config = config
        self._client = None

    @classmethod
    def get_instance(cls, config: FirestoreConfig) -> "FirestoreConnection":
        if cls._instance is None:
            cls._instance = FirestoreConnection(config)
        return cls._instance

    def client(self):
        if self._client is None:
            self._client = self._connect()
        return self._client

    def _connect(self):
        cfg = self._config
        if cfg.emulator_host:
            os.environ["FIRESTORE_EMULATOR_HOST"] = cfg.emulator_host
            logger.info("Using Firestore emulator at %s (project=%s)", cfg.emulator_host, cfg.project_id)
            return firestore.Client(project=cfg.project_id, credentials=AnonymousCredentials())

        if not firebase_admin._apps:
            cred = credentials.Certificate(cfg.credentials_file) if cfg.credentials_file else credentials.ApplicationDefault()
            options = {"projectId": cfg.project_id} if cfg.project_id else None
            firebase_admin.initialize_app(cred, options)
        logger.info("Connected to Firestore project %s", cfg.project_id or "(default)")
        return firestore.client()
