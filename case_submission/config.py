import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# SMTP relay credentials
EMAIL_USER = os.getenv("EMAIL_USER", "")
EMAIL_PASS = os.getenv("EMAIL_PASS", "")
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "465"))
# Only consulted when SMTP_PORT is not 465 (implicit SSL)
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "30"))

# Case mail envelope - fixed, never taken from the request
CASE_FROM_NAME = os.getenv("CASE_FROM_NAME", "Case Submission")
CASE_RECIPIENT = os.getenv("CASE_RECIPIENT", "guideme@guided4excellence.com")
CASE_SUBJECT = os.getenv("CASE_SUBJECT", "New Case Submission")

# PDF summary fonts
PDF_FONT_PATH = os.getenv(
    "PDF_FONT_PATH", str(Path(__file__).resolve().parent / "fonts" / "CaseFont-Regular.ttf")
)
PDF_FALLBACK_FONT = os.getenv("PDF_FALLBACK_FONT", "Helvetica")

# Upload limits (bytes)
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))  # 10MB
MAX_REQUEST_SIZE = int(os.getenv("MAX_REQUEST_SIZE", str(25 * 1024 * 1024)))  # 25MB

# HTTP
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
PORT = int(os.getenv("PORT", "3001"))


class MailSettings(BaseModel):
    """Everything the dispatcher and SMTP transport need to send a case."""

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: float = 30.0
    from_name: str = "Case Submission"
    sender_email: str = ""
    recipient: str = "guideme@guided4excellence.com"
    subject: str = "New Case Submission"

    @property
    def from_address(self) -> str:
        return f'"{self.from_name}" <{self.sender_email}>'

    @classmethod
    def from_env(cls) -> "MailSettings":
        return cls(
            smtp_host=SMTP_HOST,
            smtp_port=SMTP_PORT,
            smtp_username=EMAIL_USER,
            smtp_password=EMAIL_PASS,
            smtp_use_tls=SMTP_USE_TLS,
            smtp_timeout=SMTP_TIMEOUT,
            from_name=CASE_FROM_NAME,
            sender_email=EMAIL_USER,
            recipient=CASE_RECIPIENT,
            subject=CASE_SUBJECT,
        )
