"""
Note summary service using hosted text-generation APIs.

Cohere is tried first when COHERE_API_KEY is set; Hugging Face is the
fallback when HUGGINGFACE_API_KEY is set. Whatever comes back, including an
error message, is stored on the note. Nothing is raised to the caller and
requests are not retried.
"""
import logging
from typing import Optional
import httpx
from fastapi.concurrency import run_in_threadpool
from app.core.config import settings
from app.db.session import SessionLocal
from app.models.note import Note

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary generated."
ERROR_SUMMARY = "Error generating summary."


def missing_keys_message() -> str:
    return (
        "Missing HUGGINGFACE_API_KEY or COHERE_API_KEY in environment variables. "
        "Get a key from https://huggingface.co/settings/tokens or https://cohere.ai/"
    )


def summary_available() -> bool:
    """Whether any text-generation provider is configured."""
    return bool(settings.HUGGINGFACE_API_KEY or settings.COHERE_API_KEY)


def build_prompt(title: str, content: str) -> str:
    return f"Take in the following note and return a summary: Title: {title}, Note content: {content}"


async def _request_cohere(client: httpx.AsyncClient, prompt: str) -> Optional[str]:
    """Return the generated text, or None when Cohere answered with an error status."""
    response = await client.post(
        settings.COHERE_API_URL,
        headers={
            "Authorization": f"Bearer {settings.COHERE_API_KEY}",
            "Content-Type": "application/json"
        },
        json={
            "model": settings.COHERE_MODEL,
            "prompt": prompt,
            "max_tokens": settings.SUMMARY_MAX_TOKENS,
            "temperature": 0.7,
            "k": 0,
            "stop_sequences": [],
            "return_likelihoods": "NONE"
        }
    )
    if not response.is_success:
        logger.warning(f"Cohere API error {response.status_code}: {response.text}")
        return None

    generations = response.json().get("generations") or [{}]
    return generations[0].get("text") or NO_SUMMARY


async def _request_huggingface(client: httpx.AsyncClient, prompt: str) -> str:
    response = await client.post(
        settings.HUGGINGFACE_API_URL,
        headers={
            "Authorization": f"Bearer {settings.HUGGINGFACE_API_KEY}",
            "Content-Type": "application/json"
        },
        json={
            "inputs": prompt,
            "parameters": {
                "max_length": settings.SUMMARY_MAX_TOKENS,
                "temperature": 0.7
            }
        }
    )
    if not response.is_success:
        logger.error(f"Hugging Face API error {response.status_code}: {response.text}")
        return ERROR_SUMMARY

    data = response.json()
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0].get("generated_text") or NO_SUMMARY
    return NO_SUMMARY


async def request_summary(
    title: str,
    content: str,
    client: Optional[httpx.AsyncClient] = None
) -> str:
    """
    Request a summary of a note from the configured provider.
    
    Args:
        title: Note title
        content: Note content
        client: Optional HTTP client to use instead of a new one
        
    Returns:
        The summary, or a human-readable message describing why there is none
    """
    if not summary_available():
        message = missing_keys_message()
        logger.error(message)
        return message

    prompt = build_prompt(title, content)
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.SUMMARY_TIMEOUT)

    try:
        if settings.COHERE_API_KEY:
            logger.info("Requesting note summary from Cohere")
            summary = await _request_cohere(client, prompt)
            if summary is not None:
                return summary

        if settings.HUGGINGFACE_API_KEY:
            logger.info("Requesting note summary from Hugging Face")
            return await _request_huggingface(client, prompt)

        return ERROR_SUMMARY
    except httpx.TimeoutException:
        logger.error("Summary request timed out.")
        return ERROR_SUMMARY
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error requesting note summary: {e}", exc_info=True)
        return ERROR_SUMMARY
    finally:
        if owns_client:
            await client.aclose()


def save_summary(note_id: int, summary: str, session_factory=None) -> None:
    """Store a summary on a note using a session of its own."""
    db = (session_factory or SessionLocal)()
    try:
        note = db.query(Note).filter(Note.id == note_id).first()
        if not note:
            logger.warning(f"Note {note_id} was deleted before its summary was stored")
            return
        note.summary = summary
        db.commit()
    finally:
        db.close()


async def summarize_note(
    note_id: int,
    title: str,
    content: str,
    session_factory=None,
    client: Optional[httpx.AsyncClient] = None
) -> None:
    """
    Background task run after a note is created with is_summary set.
    
    The database write runs in the threadpool so the event loop is not blocked.
    """
    summary = await request_summary(title, content, client=client)
    await run_in_threadpool(save_summary, note_id, summary, session_factory=session_factory)
