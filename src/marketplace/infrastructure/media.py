"""Object-storage links for order line item pictures.

Line items get their own copy of the catalog picture at order time, stored
under ``order-items/<line id>/``; this module only builds the public URLs.
"""

from __future__ import annotations

from marketplace.application.dto import CoverLinksDTO


class OrderItemCoverLinks:

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    def __call__(self, line_id: str) -> CoverLinksDTO:
        prefix = f"{self._base_url}/order-items/{line_id}"
        return CoverLinksDTO(
            origin=f"{prefix}/cover.webp",
            thumbnail=f"{prefix}/cover-thumbnail.webp",
        )
