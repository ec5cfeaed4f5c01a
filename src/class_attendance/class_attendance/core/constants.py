"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

INSTITUTIONS_COLLECTION = "institutions"

CLASSES_COLLECTION = "classes"
STUDENTS_COLLECTION = "students"
SUBJECTS_COLLECTION = "subjects"
DORMITORIES_COLLECTION = "dormitories"
ATTENDANCE_COLLECTION = "attendance"
ROLL_CALL_COLLECTION = "roll_call_attendance"

# Firestore rejects batches with more than 500 writes.
FIRESTORE_BATCH_LIMIT = 500

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIMEZONE = "Asia/Jakarta"

UNKNOWN_STUDENT_NAME = "Nama Tidak Ditemukan"
UNKNOWN_CLASS_NAME = "Kelas Tidak Diketahui"
