"""Authorization stamping for new payments."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from payment_api.domain.models.transaction import Transaction

FIXED_NSU = "1234567890"
FIXED_AUTHORIZATION_CODE = "147258369"


@dataclass(frozen=True)
class Authorization:
    """Identifiers issued by the acquirer for an approved payment."""

    nsu: str
    authorization_code: str


class Authorizer(ABC):
    @abstractmethod
    def authorize(self, transaction: Transaction) -> Authorization:
        """Return the identifiers to stamp on an accepted transaction."""


class StaticAuthorizer(Authorizer):
    """Stands in for an external acquirer by issuing fixed identifiers."""

    def authorize(self, transaction: Transaction) -> Authorization:
        return Authorization(nsu=FIXED_NSU, authorization_code=FIXED_AUTHORIZATION_CODE)
