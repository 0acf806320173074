from __future__ import annotations


class CatalogInconsistencyError(ValueError):
    """A plan references a crop or livestock id the catalog does not have."""

    def __init__(self, kind: str, option_id: str):
        self.kind = kind
        self.option_id = option_id
        super().__init__(f"Catalog inconsistency: unknown {kind} id '{option_id}'.")
