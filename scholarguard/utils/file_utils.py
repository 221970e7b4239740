import io
import logging

from pdfminer.high_level import extract_text as extract_pdf_text
from docx import Document as DocxDocument

from scholarguard.config import ALLOWED_EXTENSIONS
from scholarguard.errors import TextExtractionError

logger = logging.getLogger("file_utils")


def allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def extract_text_from_file(content_bytes: bytes, filename: str) -> str:
    if "." not in filename:
        raise TextExtractionError(f"Unsupported file type: {filename}")
    ext = filename.rsplit(".", 1)[1].lower()
    try:
        if ext in ("txt", "md"):
            text = content_bytes.decode("utf-8", errors="ignore")
        elif ext == "pdf":
            # one text block per page, pages separated by a blank line
            text = extract_pdf_text(io.BytesIO(content_bytes)).replace("\f", "\n\n")
        elif ext == "docx":
            doc = DocxDocument(io.BytesIO(content_bytes))
            text = "\n".join([p.text for p in doc.paragraphs])
        else:
            raise TextExtractionError(f"Unsupported file type: {filename}")
    except TextExtractionError:
        raise
    except Exception as e:
        logger.error(f"❌ Failed to read {filename}: {e}")
        raise TextExtractionError(
            f"Failed to read {filename}. It might be password protected or corrupted."
        ) from e

    if not text.strip():
        raise TextExtractionError(
            "No text could be extracted. The file might be empty or an image-based PDF."
        )

    logger.info(f"Extracted {len(text.split())} words from {filename}")
    return text
