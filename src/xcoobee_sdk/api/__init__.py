"""
Per-endpoint calls against the XcooBee API.

Each function performs one remote operation through a `GraphQLClient` and
returns plain dicts/lists taken from the response. Paged queries return
`{"data": [...], "page_info": {...}}` so they can be fed to the paging engine.
"""
