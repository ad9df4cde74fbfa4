"""Command-line entry point (`todotxt-sync`)."""
