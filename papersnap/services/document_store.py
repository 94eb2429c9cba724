"""
Document Store - the single authoritative owner of documents, folders and
flashcard sets.

Every mutating operation applies in memory and then writes the affected
collection through to the injected persistence adapter before returning.
A failed write is logged and remembered per collection until that same
collection saves again; it never rolls back the in-memory change and never
raises to the caller.

Operations that name an unknown id are no-ops. Single-record mutators
return the resulting record (or None) so an HTTP layer can report 404,
but the store itself never treats an unknown id as an error.
"""
import uuid
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.config import DOCUMENTS_KEY, FLASHCARDS_KEY, FOLDERS_KEY
from ..core.logging_config import get_logger
from ..domain.entities import DocumentRecord, FlashcardSet, Folder
from .persistence.base import PersistenceInterface, StorageReadError, StorageWriteError

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class DocumentStore:
    """
    In-memory document/folder/flashcard store with write-through persistence.

    Snapshots handed out (properties and getters) are deep copies; mutating
    them has no effect on the store.
    """

    def __init__(self, persistence: PersistenceInterface):
        """
        Initialize the store and load all three collections.

        Args:
            persistence: Key/value adapter (dependency injection)
        """
        self._persistence = persistence
        self._lock = RLock()
        self._save_errors: Dict[str, str] = {}

        self._documents: List[DocumentRecord] = self._load_collection(DOCUMENTS_KEY, DocumentRecord)
        self._folders: List[Folder] = self._load_collection(FOLDERS_KEY, Folder)
        self._flashcard_sets: List[FlashcardSet] = self._load_collection(FLASHCARDS_KEY, FlashcardSet)
        self._unfile_dangling_documents()

        logger.info(
            f"Document store loaded: {len(self._documents)} documents, "
            f"{len(self._folders)} folders, {len(self._flashcard_sets)} flashcard sets"
        )

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def _load_collection(self, key: str, model: Type[T]) -> List[T]:
        try:
            raw = self._persistence.load(key)
        except StorageReadError as e:
            logger.error(f"Could not load '{key}', starting with an empty collection: {e}")
            return []

        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"Stored '{key}' is a {type(raw).__name__}, expected a list; starting empty")
            return []

        items: List[T] = []
        seen_ids = set()
        for index, entry in enumerate(raw):
            try:
                item = model.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"Skipping invalid entry #{index} in '{key}': {e.error_count()} validation error(s)")
                continue
            if item.id in seen_ids:
                logger.warning(f"Skipping duplicate id {item.id} in '{key}'")
                continue
            seen_ids.add(item.id)
            items.append(item)

        dropped = len(raw) - len(items)
        if dropped:
            logger.warning(f"Loaded '{key}' with {dropped} of {len(raw)} entries dropped")
        return items

    def _unfile_dangling_documents(self) -> None:
        # Repaired in memory only; the next documents write persists it
        folder_ids = {folder.id for folder in self._folders}
        for index, doc in enumerate(self._documents):
            if doc.folder_id is not None and doc.folder_id not in folder_ids:
                logger.warning(f"Document {doc.id} referenced missing folder {doc.folder_id}; moved to unfiled")
                self._documents[index] = doc.model_copy(update={"folder_id": None})

    def _save(self, key: str, items: Iterable[BaseModel]) -> None:
        try:
            self._persistence.save(key, [item.to_storage() for item in items])
        except StorageWriteError as e:
            self._save_errors[key] = str(e)
            logger.error(f"Failed to persist '{key}', keeping in-memory state: {e}")
        else:
            self._save_errors.pop(key, None)

    @property
    def last_save_error(self) -> Optional[str]:
        """Most recent unresolved write failure, None once every collection has saved."""
        with self._lock:
            if not self._save_errors:
                return None
            return "; ".join(f"{key}: {error}" for key, error in self._save_errors.items())

    def _save_documents(self) -> None:
        self._save(DOCUMENTS_KEY, self._documents)

    def _save_folders(self) -> None:
        self._save(FOLDERS_KEY, self._folders)

    def _save_flashcard_sets(self) -> None:
        self._save(FLASHCARDS_KEY, self._flashcard_sets)

    # ------------------------------------------------------------------
    # Snapshots and derived views
    # ------------------------------------------------------------------

    @property
    def documents(self) -> List[DocumentRecord]:
        with self._lock:
            return [doc.model_copy(deep=True) for doc in self._documents]

    @property
    def active_documents(self) -> List[DocumentRecord]:
        with self._lock:
            return [doc.model_copy(deep=True) for doc in self._documents if not doc.is_deleted]

    @property
    def deleted_documents(self) -> List[DocumentRecord]:
        with self._lock:
            return [doc.model_copy(deep=True) for doc in self._documents if doc.is_deleted]

    @property
    def folders(self) -> List[Folder]:
        with self._lock:
            return [folder.model_copy(deep=True) for folder in self._folders]

    @property
    def flashcard_sets(self) -> List[FlashcardSet]:
        with self._lock:
            return [fs.model_copy(deep=True) for fs in self._flashcard_sets]

    @property
    def has_new_documents(self) -> bool:
        with self._lock:
            return any(doc.is_new for doc in self._documents if not doc.is_deleted)

    def get_document(self, doc_id: str) -> Optional[DocumentRecord]:
        with self._lock:
            doc = self._find_document(doc_id)
            return doc.model_copy(deep=True) if doc else None

    def get_folder(self, folder_id: str) -> Optional[Folder]:
        with self._lock:
            for folder in self._folders:
                if folder.id == folder_id:
                    return folder.model_copy(deep=True)
            return None

    def get_flashcard_set(self, set_id: str) -> Optional[FlashcardSet]:
        with self._lock:
            for fs in self._flashcard_sets:
                if fs.id == set_id:
                    return fs.model_copy(deep=True)
            return None

    def documents_in_folder(self, folder_id: Optional[str]) -> List[DocumentRecord]:
        """Active documents filed under folder_id; None selects unfiled documents."""
        with self._lock:
            return [
                doc.model_copy(deep=True)
                for doc in self._documents
                if not doc.is_deleted and doc.folder_id == folder_id
            ]

    def _find_document(self, doc_id: str) -> Optional[DocumentRecord]:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def _update_one(self, doc_id: str, mutate: Callable[[DocumentRecord], DocumentRecord]) -> Optional[DocumentRecord]:
        with self._lock:
            for index, doc in enumerate(self._documents):
                if doc.id == doc_id:
                    self._documents[index] = mutate(doc)
                    self._save_documents()
                    return self._documents[index].model_copy(deep=True)
            logger.debug(f"No document with id {doc_id}; nothing changed")
            return None

    # ------------------------------------------------------------------
    # Document operations
    # ------------------------------------------------------------------

    def add_document(self, record: DocumentRecord) -> DocumentRecord:
        """Insert at the front of the collection as a new, active record."""
        with self._lock:
            doc = record.model_copy(deep=True, update={"is_new": True, "is_deleted": False})
            if self._find_document(doc.id) is not None:
                raise ValueError(f"Document id {doc.id} already exists")
            self._documents.insert(0, doc)
            self._save_documents()
            logger.info(f"Added document {doc.id} ({doc.kind.value}, {doc.vendor!r})")
            return doc.model_copy(deep=True)

    def update_document(self, record: DocumentRecord) -> Optional[DocumentRecord]:
        """Replace the stored record with the same id. Unknown ids are ignored."""
        def replace(existing: DocumentRecord) -> DocumentRecord:
            updated = record.model_copy(deep=True)
            # is_new is cleared once and never set again
            if not existing.is_new and updated.is_new:
                updated.is_new = False
            return updated

        return self._update_one(record.id, replace)

    def soft_delete_document(self, doc_id: str) -> Optional[DocumentRecord]:
        result = self._update_one(doc_id, lambda d: d.model_copy(update={"is_deleted": True}))
        if result:
            logger.info(f"Moved document {doc_id} to trash")
        return result

    def restore_document(self, doc_id: str) -> Optional[DocumentRecord]:
        result = self._update_one(doc_id, lambda d: d.model_copy(update={"is_deleted": False}))
        if result:
            logger.info(f"Restored document {doc_id} from trash")
        return result

    def permanent_delete_document(self, doc_id: str) -> bool:
        """Remove the record entirely. Returns False if it was not there."""
        with self._lock:
            remaining = [doc for doc in self._documents if doc.id != doc_id]
            if len(remaining) == len(self._documents):
                return False
            self._documents = remaining
            self._save_documents()
            logger.info(f"Permanently deleted document {doc_id}")
            return True

    def empty_trash(self) -> int:
        """Permanently remove every soft-deleted record. Returns the number removed."""
        with self._lock:
            remaining = [doc for doc in self._documents if not doc.is_deleted]
            removed = len(self._documents) - len(remaining)
            self._documents = remaining
            self._save_documents()
            logger.info(f"Emptied trash ({removed} documents removed)")
            return removed

    def mark_as_seen(self, doc_id: str) -> Optional[DocumentRecord]:
        return self._update_one(doc_id, lambda d: d.model_copy(update={"is_new": False}))

    def move_document_to_folder(self, doc_id: str, folder_id: Optional[str]) -> Optional[DocumentRecord]:
        """File one document under folder_id, or unfile it when folder_id is None."""
        folder_id = folder_id or None
        return self._update_one(doc_id, lambda d: d.model_copy(update={"folder_id": folder_id}))

    def move_documents_to_folder(self, doc_ids: Iterable[str], folder_id: Optional[str]) -> int:
        """
        File every listed document under folder_id in one step.

        Ids not in the collection are skipped.

        Returns:
            Number of documents that were moved
        """
        folder_id = folder_id or None
        wanted = set(doc_ids)
        with self._lock:
            moved = 0
            for index, doc in enumerate(self._documents):
                if doc.id in wanted:
                    self._documents[index] = doc.model_copy(update={"folder_id": folder_id})
                    moved += 1
            self._save_documents()
            logger.info(f"Moved {moved} documents to folder {folder_id or '(unfiled)'}")
            return moved

    # ------------------------------------------------------------------
    # Folder operations
    # ------------------------------------------------------------------

    def create_folder(self, name: str) -> Folder:
        with self._lock:
            folder = Folder(id=str(uuid.uuid4()), name=name)
            self._folders.append(folder)
            self._save_folders()
            logger.info(f"Created folder {folder.id} ({name!r})")
            return folder.model_copy(deep=True)

    def delete_folder(self, folder_id: str) -> int:
        """
        Delete a folder and unfile every document that referenced it,
        including trashed ones, so no dangling reference survives a restore.

        Returns:
            Number of documents that were unfiled
        """
        with self._lock:
            unfiled = 0
            for index, doc in enumerate(self._documents):
                if doc.folder_id == folder_id:
                    self._documents[index] = doc.model_copy(update={"folder_id": None})
                    unfiled += 1
            self._folders = [f for f in self._folders if f.id != folder_id]
            self._save_documents()
            self._save_folders()
            logger.info(f"Deleted folder {folder_id} ({unfiled} documents unfiled)")
            return unfiled

    # ------------------------------------------------------------------
    # Flashcard set operations
    # ------------------------------------------------------------------

    def create_flashcard_set(self, flashcard_set: FlashcardSet) -> FlashcardSet:
        with self._lock:
            fs = flashcard_set.model_copy(deep=True)
            self._flashcard_sets.insert(0, fs)
            self._save_flashcard_sets()
            logger.info(f"Created flashcard set {fs.id} ({len(fs.cards)} cards)")
            return fs.model_copy(deep=True)

    def delete_flashcard_set(self, set_id: str) -> bool:
        with self._lock:
            remaining = [fs for fs in self._flashcard_sets if fs.id != set_id]
            if len(remaining) == len(self._flashcard_sets):
                return False
            self._flashcard_sets = remaining
            self._save_flashcard_sets()
            return True
