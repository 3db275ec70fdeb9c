# app/domain/models/client_domain_model.py

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Client:
    """Domain model for a registered business client."""
    id: str
    name: str
    cnpj: str  # Digits only
    cep: str
    address: str
    number: str
    neighborhood: str
    city: str
    state: str
    sector: str
    email: Optional[str] = None
    phone: Optional[str] = None
    complement: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def is_active(self) -> bool:
        """A client is active while it has no deletion timestamp."""
        return self.deleted_at is None

    def is_deleted(self) -> bool:
        return not self.is_active()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
