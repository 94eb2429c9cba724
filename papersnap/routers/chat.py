"""
Chat Router - conversations with the document assistant.

A session sees the documents that were active when it was created.
"""
from typing import Optional

from fastapi import APIRouter, status

from ..api.dto import BulkResultDTO, ChatMessageDTO, ChatReplyDTO, ChatSessionCreateDTO, ChatSessionDTO
from ..api.exceptions import ChatSessionNotFoundError, DocumentNotFoundError
from .dependencies import get_chat_manager, get_document_store

router = APIRouter()


@router.post("/chat/sessions", response_model=ChatSessionDTO, status_code=status.HTTP_201_CREATED)
def create_chat_session(request: Optional[ChatSessionCreateDTO] = None):
    store = get_document_store()
    if request is None or request.document_ids is None:
        documents = store.active_documents
    else:
        documents = []
        for doc_id in request.document_ids:
            doc = store.get_document(doc_id)
            if doc is None or doc.is_deleted:
                raise DocumentNotFoundError(f"Document {doc_id} not found")
            documents.append(doc)

    session = get_chat_manager().create_session(documents)
    return ChatSessionDTO(session_id=session.id, document_count=len(documents))


@router.post("/chat/sessions/{session_id}/messages", response_model=ChatReplyDTO)
def send_chat_message(session_id: str, request: ChatMessageDTO):
    """Send one message. A model failure returns 503 and the message can be resent."""
    reply = get_chat_manager().send_message(session_id, request.message)
    return ChatReplyDTO(session_id=session_id, reply=reply)


@router.delete("/chat/sessions/{session_id}", response_model=BulkResultDTO)
def close_chat_session(session_id: str):
    if not get_chat_manager().close_session(session_id):
        raise ChatSessionNotFoundError(f"Chat session {session_id} not found")
    return BulkResultDTO(count=1)
