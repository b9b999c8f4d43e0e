"""Core of the client: configuration, domain records and the search cursor.

Nothing here knows about httpx clients or URLs except through the
`Transport` contract.
"""
