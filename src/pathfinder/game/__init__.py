"""Game services - queries, mutations, authoring and map layout over one store."""
