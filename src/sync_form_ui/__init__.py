"""FastHTML presentation layer of the sync job form."""
