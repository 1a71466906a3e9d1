"""Web framework integrations for the polljoy connector."""
