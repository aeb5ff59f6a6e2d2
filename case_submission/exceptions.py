"""Error kinds raised while turning a case submission into an email"""


class CaseSubmissionError(Exception):
    """Base class for case submission failures"""


class RenderFailure(CaseSubmissionError):
    """The HTML body or PDF summary could not be built"""


class TransportFailure(CaseSubmissionError):
    """The mail relay rejected or failed to deliver the message"""


class UploadTooLarge(CaseSubmissionError):
    """An uploaded file, or the upload as a whole, exceeds the configured limit"""

    def __init__(self, message: str, limit: int):
        super().__init__(message)
        self.limit = limit
