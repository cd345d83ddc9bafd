from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from src.shared.models.common import CamelModel, RequestModel
from src.shared.models.enums import ClientType

class AddressDTO(RequestModel):
    """Адрес клиента. Хранится одной строкой."""
    street: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    neighborhood: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zipcode: str = Field(..., min_length=1)

    def format(self) -> str:
        """'street, number, neighborhood, city, state, zipcode'"""
        return ", ".join([self.street, self.number, self.neighborhood, self.city, self.state, self.zipcode])

class CreateClientRequest(RequestModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[AddressDTO] = None
    client_type: ClientType = ClientType.INDIVIDUAL
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    business_name: Optional[str] = None
    state_registration: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None

class UpdateClientRequest(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[AddressDTO] = None
    client_type: Optional[ClientType] = None
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    business_name: Optional[str] = None
    state_registration: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None

class ClientDTO(CamelModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    client_type: ClientType = ClientType.INDIVIDUAL
    cpf: Optional[str] = None
    cnpj: Optional[str] = None
    business_name: Optional[str] = None
    state_registration: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    created_by: str
    updated_by: Optional[str] = None
    removed_by: Optional[str] = None
    removed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
