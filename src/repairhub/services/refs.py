"""Lazily validated reference from an application to a service."""

from dataclasses import dataclass

from repairhub.services.id_generator import SERVICE_PREFIX, is_valid_id


@dataclass(frozen=True)
class ServiceRef:
    """A stored ``service_id`` that is never assumed to resolve.

    The store does not enforce the reference, so a ref may be malformed or
    point at a deleted service. Only ``ServiceRepository.resolve`` dereferences it.
    """

    raw: str

    @property
    def is_well_formed(self) -> bool:
        return is_valid_id(self.raw, SERVICE_PREFIX)

    def __str__(self) -> str:
        return self.raw
