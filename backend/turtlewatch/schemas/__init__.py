# Schemas package init
"""
Pydantic request/response contracts, one module per record type.
"""
