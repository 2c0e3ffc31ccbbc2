from fastapi import APIRouter, UploadFile, File, Depends

from TIV.api.schemas import ResumeParseResponse
from TIV.api.dependencies import get_document_extractor, get_config
from packages.tiv_core.config import TIVConfig
from packages.tiv_core.errors import DocumentTooLargeError
from packages.tiv_core.logging import get_logger
from packages.tiv_profile.base import IDocumentExtractor
from packages.tiv_profile.fields import guess_profile

router = APIRouter(tags=["Profile"])
logger = get_logger("TIV.api.resume")


@router.post("/parse-resume", response_model=ResumeParseResponse)
async def parse_resume(
    resume: UploadFile = File(...),
    extractor: IDocumentExtractor = Depends(get_document_extractor),
    config: TIVConfig = Depends(get_config),
):
    """
    Upload a PDF/DOCX resume and get a best-effort guess of name, email and phone.
    The guess is never authoritative; the client confirms it via complete-profile.
    """
    logger.info(f"Resume received. Filename: {resume.filename}, ContentType: {resume.content_type}")

    chunks = []
    file_size = 0
    while content := await resume.read(1024 * 1024):  # 1MB chunks
        file_size += len(content)
        if file_size > config.MAX_UPLOAD_BYTES:
            raise DocumentTooLargeError(config.MAX_UPLOAD_BYTES)
        chunks.append(content)

    document = extractor.extract(b"".join(chunks), resume.content_type, resume.filename)
    guess = guess_profile(document.text)

    logger.info(
        f"Resume parsed ({file_size} bytes). Found name={bool(guess.name)}, "
        f"email={bool(guess.email)}, phone={bool(guess.phone)}"
    )
    return ResumeParseResponse(name=guess.name, email=guess.email, phone=guess.phone)
