"""Invoice domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ..quotations.schemas import Address


class InvoiceCustomer(BaseModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[Address] = None


class InvoiceItem(BaseModel):
    id: str
    name: str
    description: str
    quantity: float = Field(gt=0)
    unitPrice: float = Field(ge=0)
    totalPrice: float = Field(ge=0)


class InvoiceTerms(BaseModel):
    validUntil: str
    paymentTerms: str
    deliveryTerms: str


class InvoiceQuotation(BaseModel):
    quotationNumber: str
    customer: InvoiceCustomer
    items: list[InvoiceItem]
    subtotal: float = Field(ge=0)
    tax: float = Field(ge=0)
    shipping: float = Field(ge=0)
    discount: float = Field(ge=0)
    total: float = Field(gt=0)
    terms: InvoiceTerms
    notes: Optional[str] = None


class CreateInvoiceRequest(BaseModel):
    """Schema for invoicing an accepted quotation"""

    quotation: InvoiceQuotation
    sendEmail: bool = False
    dueInDays: int = 30


class InvoiceCreated(BaseModel):
    id: str
    invoiceNumber: str
    status: str
    total: float
    dueDate: str
    paymentUrl: Optional[str] = None
    customerId: str


class InvoiceStatus(BaseModel):
    id: str
    invoiceNumber: str
    status: str
    total: float
    amountPaid: float
    amountDue: float
    dueDate: str
    paidDate: Optional[str] = None
    paymentUrl: Optional[str] = None
    customerId: str


class CreateInvoiceResponse(BaseModel):
    success: bool = True
    invoice: InvoiceCreated


class InvoiceStatusResponse(BaseModel):
    success: bool = True
    invoice: InvoiceStatus
