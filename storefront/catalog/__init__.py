"""
Catalog package for the storefront.

This package contains the catalogue query engine (search, facet
filtering, sorting and pagination over an in-memory product snapshot)
and the route definitions that expose it under ``/api/catalog``. The
router lives in ``storefront.catalog.router`` and is mounted by
``storefront.main``.
"""
