"""Request dispatch and ASGI response emission."""
