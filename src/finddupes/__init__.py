"""Find duplicate files by name+size or by content hash."""
