"""
Case Routes - public case submission form endpoint
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from ..config import MAX_FILE_SIZE, MAX_REQUEST_SIZE, MailSettings
from ..email_service import SMTPMailTransport
from ..exceptions import UploadTooLarge
from ..services.submission_service import SubmissionDispatcher, UploadedFile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Cases"])


def get_dispatcher() -> SubmissionDispatcher:
    settings = MailSettings.from_env()
    return SubmissionDispatcher(settings=settings, transport=SMTPMailTransport(settings))


async def read_submission(request: Request) -> tuple[dict[str, str], list[UploadedFile]]:
    """Split a multipart body into text fields and uploaded files, enforcing size limits"""
    form_data = await request.form()
    fields: dict[str, str] = {}
    files: list[UploadedFile] = []
    total = 0

    for name, value in form_data.multi_items():
        if not isinstance(value, UploadFile):
            fields[name] = value
            continue

        contents = await value.read()
        filename = value.filename or ""
        if len(contents) > MAX_FILE_SIZE:
            logger.warning(f"❌ Rejected upload '{filename}': {len(contents)} bytes")
            raise UploadTooLarge(
                f"File {filename} exceeds {MAX_FILE_SIZE} bytes", limit=MAX_FILE_SIZE
            )
        total += len(contents)
        if total > MAX_REQUEST_SIZE:
            logger.warning(f"❌ Rejected submission: uploads exceed {MAX_REQUEST_SIZE} bytes")
            raise UploadTooLarge(
                f"Uploads exceed {MAX_REQUEST_SIZE} bytes", limit=MAX_REQUEST_SIZE
            )
        files.append(UploadedFile(filename=filename, content=contents))

    return fields, files


@router.post("/SubmitCase")
async def submit_case(
    request: Request,
    dispatcher: SubmissionDispatcher = Depends(get_dispatcher),
):
    """Email a submitted case, its PDF summary and any uploaded files to the case inbox"""
    fields, files = await read_submission(request)
    logger.info(f"📤 Case submission received: {len(fields)} field(s), {len(files)} file(s)")

    try:
        await dispatcher.dispatch(fields, files)
    except Exception as e:
        logger.error(f"❌ Error submitting case: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Error submitting case"})

    return {"message": "Case submitted successfully"}
