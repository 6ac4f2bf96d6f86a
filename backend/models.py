from dataclasses import dataclass
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator


class Signature(NamedTuple):
    """Signature DSA (r, s)"""
    r: int
    s: int


@dataclass(frozen=True)
class Verification:
    """
    Valeurs intermédiaires du vérifieur pour un hash donné

    w vaut None quand s n'est pas inversible modulo q : u1, u2 et v ne
    sont alors pas calculés et la signature est rejetée.
    """
    w: Optional[int]
    u1: Optional[int]
    u2: Optional[int]
    v: Optional[int]
    valid: bool  # v == r


class DemoInput(BaseModel):
    """Les sept entiers saisis par l'utilisateur, dans l'ordre de saisie"""
    p: int = Field(ge=0)
    q: int = Field(ge=0)
    h: int = Field(ge=0)
    x: int = Field(ge=0)
    k: int = Field(ge=0)
    hash1: int = Field(ge=0)
    hash2: int = Field(ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def parse_decimal(cls, value):
        # Les entiers arrivent en texte décimal, éventuellement très longs
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                raise ValueError(f"entier décimal attendu, reçu {value!r}")
            return int(value, 10)
        return value


class DemoReport(BaseModel):
    """Rapport de la démonstration"""
    g: int
    y: int
    r: int
    s: int
    first: Verification   # H(M1), le hash signé
    second: Verification  # H(M2), le faux hash
