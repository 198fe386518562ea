"""Pure helpers - vote arithmetic and calendar math."""
