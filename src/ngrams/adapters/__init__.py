"""HTTP adapters: request issuer and the client facade."""
