"""Row adapters mapping raw CSV records to mutations."""
