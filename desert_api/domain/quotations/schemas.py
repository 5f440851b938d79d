"""Quotation domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from ...catalog import CurrencyCode
from ...pdf.documents import DEFAULT_DOCUMENT_STATUS, DocumentStatus


class Address(BaseModel):
    street: str
    city: str
    state: str
    zip: str
    country: str


class QuotationCustomer(BaseModel):
    name: str
    company: Optional[str] = None
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[Address] = None


class QuotationItemRequest(BaseModel):
    productId: str
    variantId: Optional[str] = None
    quantity: float = Field(gt=0)
    customPrice: Optional[float] = None  # Overrides the catalog price


class Discount(BaseModel):
    amount: float
    description: str


class QuotationTermsRequest(BaseModel):
    paymentTerms: Optional[str] = None
    deliveryTerms: Optional[str] = None
    warranty: Optional[str] = None
    leadTime: Optional[str] = None
    shippingCost: Optional[float] = None
    discount: Optional[Discount] = None


class CreateQuotationRequest(BaseModel):
    """Schema for creating a new quotation"""

    customer: QuotationCustomer
    items: list[QuotationItemRequest]
    terms: Optional[QuotationTermsRequest] = None
    notes: Optional[str] = None
    internalNotes: Optional[str] = None
    validityDays: Optional[int] = None
    currency: CurrencyCode = "USD"


class EmailCustomer(BaseModel):
    """Customer block of an inline quotation; unknown fields are kept"""

    model_config = ConfigDict(extra="allow")

    name: str
    email: EmailStr
    salutation: Optional[str] = None  # e.g. "Mr. Aldewereld" for a formal salutation


class InlineQuotation(BaseModel):
    model_config = ConfigDict(extra="allow")

    quotationNumber: str
    customer: Optional[EmailCustomer] = None
    customerData: Optional[EmailCustomer] = None


class QuotationEmailOptions(BaseModel):
    subject: Optional[str] = None
    message: Optional[str] = None
    cc: Optional[list[EmailStr]] = None
    attachPDF: bool = True


class EmailQuotationRequest(BaseModel):
    """Schema for emailing a stored or inline quotation"""

    quotationId: Optional[str] = None
    quotation: Optional[InlineQuotation] = None
    emailOptions: Optional[QuotationEmailOptions] = None
    documentStatus: DocumentStatus = DEFAULT_DOCUMENT_STATUS

    @model_validator(mode="after")
    def validate_source(self) -> "EmailQuotationRequest":
        if not self.quotationId and not self.quotation:
            raise ValueError("Either quotationId or quotation must be provided")
        if self.quotation and not (self.quotation.customer or self.quotation.customerData):
            raise ValueError("Quotation must have customer or customerData")
        return self


class AddendumCustomer(BaseModel):
    name: str
    email: EmailStr
    company: Optional[str] = None
    salutation: Optional[str] = None


class AddendumEmailOptions(BaseModel):
    subject: Optional[str] = None
    message: Optional[str] = None
    cc: Optional[list[EmailStr]] = None


class IncludePhotos(BaseModel):
    productOverview: bool = True
    detail: bool = True
    installation: bool = True
    actualModelOnly: bool = False


class PhotoAddendumRequest(BaseModel):
    """Schema for emailing a product photo addendum"""

    quotationId: Optional[str] = None
    quotationNumber: Optional[str] = None
    productIds: list[str] = Field(min_length=1)
    customer: Optional[AddendumCustomer] = None
    emailOptions: Optional[AddendumEmailOptions] = None
    includePhotos: Optional[IncludePhotos] = None
    documentStatus: DocumentStatus = DEFAULT_DOCUMENT_STATUS

    @model_validator(mode="after")
    def validate_reference(self) -> "PhotoAddendumRequest":
        if not (self.quotationId or self.quotationNumber or self.customer):
            raise ValueError("Either quotationId, quotationNumber, or customer must be provided")
        return self
