"""Host adapters for the editor surface."""
