"""CSV ingestion for transaction records."""
