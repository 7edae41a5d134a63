# Services package.
#
#   enrichment       — concurrent author fan-out for a page of articles
#   article_usecase  — Fetch / GetByID / GetByTitle / Store / Update / Delete
#
# Services depend on the repository ports only; concrete stores are wired
# in by the router layer (see ``bulletin.routers.articles``).
