"""Enregistrements immuables décodés depuis l'API ``/users``."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping


def _field(payload: Mapping[str, Any], key: str, expected: type) -> Any:
    if not isinstance(payload, Mapping):
        raise ValueError(f"Objet JSON attendu, reçu : {type(payload).__name__}.")
    if key not in payload:
        raise ValueError(f"Champ « {key} » manquant.")
    value = payload[key]
    # bool est un int en Python
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(
            f"Champ « {key} » : {expected.__name__} attendu, reçu {type(value).__name__}."
        )
    return value


@dataclass(frozen=True, slots=True)
class Geo:
    lat: str
    lng: str

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Geo:
        return cls(lat=_field(payload, "lat", str), lng=_field(payload, "lng", str))

    def to_json(self) -> dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, slots=True)
class Company:
    name: str
    catch_phrase: str
    bs: str

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Company:
        return cls(
            name=_field(payload, "name", str),
            catch_phrase=_field(payload, "catchPhrase", str),
            bs=_field(payload, "bs", str),
        )

    def to_json(self) -> dict[str, Any]:
        return {"name": self.name, "catchPhrase": self.catch_phrase, "bs": self.bs}


@dataclass(frozen=True, slots=True)
class Address:
    street: str
    suite: str
    city: str
    zipcode: str
    geo: Geo

    @property
    def full_address(self) -> str:
        return f"{self.street}, {self.suite}, {self.city} {self.zipcode}"

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Address:
        return cls(
            street=_field(payload, "street", str),
            suite=_field(payload, "suite", str),
            city=_field(payload, "city", str),
            zipcode=_field(payload, "zipcode", str),
            geo=Geo.from_json(_field(payload, "geo", dict)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "street": self.street,
            "suite": self.suite,
            "city": self.city,
            "zipcode": self.zipcode,
            "geo": self.geo.to_json(),
        }


@dataclass(frozen=True, slots=True)
class User:
    """Utilisateur distant. L'identité est ``id``, attribué par le serveur.

    Un brouillon jamais envoyé au serveur porte ``id=None`` ; un
    enregistrement décodé porte toujours un entier.
    """

    name: str
    email: str
    phone: str
    website: str
    company: Company
    address: Address
    id: int | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> User:
        """Décode un objet JSON ; lève ValueError si la forme est invalide."""
        return cls(
            id=_field(payload, "id", int),
            name=_field(payload, "name", str),
            email=_field(payload, "email", str),
            phone=_field(payload, "phone", str),
            website=_field(payload, "website", str),
            company=Company.from_json(_field(payload, "company", dict)),
            address=Address.from_json(_field(payload, "address", dict)),
        )

    def to_json(self, *, include_id: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
            "company": self.company.to_json(),
            "address": self.address.to_json(),
        }
        if include_id and self.id is not None:
            payload["id"] = self.id
        return payload

    def with_id(self, user_id: int) -> User:
        return replace(self, id=user_id)
