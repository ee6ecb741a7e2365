"""Content search and relevance ranking for the site catalog and editorial content."""
