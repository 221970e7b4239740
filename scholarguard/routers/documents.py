from fastapi import APIRouter, UploadFile, File, HTTPException
import logging

from scholarguard.config import MAX_FILE_SIZE_MB
from scholarguard.errors import TextExtractionError
from scholarguard.schemas.report_schemas import ExtractedDocument
from scholarguard.utils.file_utils import extract_text_from_file, allowed_file

router = APIRouter(prefix="/documents", tags=["documents"])

logger = logging.getLogger("documents")


@router.post("/extract", response_model=ExtractedDocument)
async def extract_document(file: UploadFile = File(...)):
    if not file.filename or not allowed_file(file.filename):
        raise HTTPException(status_code=400, detail=f"Invalid file type: {file.filename}")

    raw = await file.read()
    if len(raw) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_FILE_SIZE_MB} MB.")

    logger.info(f"📄 Processing file: {file.filename}")
    try:
        text = extract_text_from_file(raw, file.filename)
    except TextExtractionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ExtractedDocument(filename=file.filename, text=text, wordCount=len(text.split()))
