"""GraphQL API for Thoughtboard."""
