"""ORM models for stored CVs and their export history.

- CVDocument: a saved CV snapshot with its chosen layout
- ExportEvent: one attempted export of a CV (success or failure)
"""

from cv_studio.data.db import Base
from cv_studio.data.models.cv_document import CVDocument
from cv_studio.data.models.export_event import ExportEvent

__all__ = ["Base", "CVDocument", "ExportEvent"]
