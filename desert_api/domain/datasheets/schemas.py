"""Datasheet domain schemas"""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr

from ...pdf.documents import DEFAULT_DOCUMENT_STATUS, DocumentStatus

Language = Literal["en", "nl"]


class DatasheetCustomer(BaseModel):
    name: str
    email: EmailStr
    company: Optional[str] = None
    salutation: Optional[str] = None


class DatasheetEmailOptions(BaseModel):
    subject: Optional[str] = None
    message: Optional[str] = None
    cc: Optional[list[EmailStr]] = None
    bcc: Optional[list[EmailStr]] = None


class DatasheetRequest(BaseModel):
    """Generate a datasheet PDF, returned directly or emailed to the customer"""

    productId: str
    variantId: Optional[str] = None
    customer: Optional[DatasheetCustomer] = None
    emailOptions: Optional[DatasheetEmailOptions] = None
    documentStatus: DocumentStatus = DEFAULT_DOCUMENT_STATUS
    language: Language = "en"
    languages: Optional[list[Language]] = None  # One attachment per language
    returnPdf: bool = False
