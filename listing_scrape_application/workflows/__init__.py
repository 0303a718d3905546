"""Crawl workflow and entrypoints for scraping paginated listing sites.

The crawl:
- Asks Firecrawl for the pagination links on the index page (falls back to the index page alone)
- Extracts listing cards from each page, one page at a time, backing off on rate limits
- Rewrites the JSON checkpoint after every successful page
"""
