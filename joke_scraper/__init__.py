"""Joke page scraper package.

Fetches sequentially numbered joke pages, extracts title, body and
category, and appends the results to a CSV file.

Key modules:
    base        -- BasePageExtractor fetch/parse pipeline
    scrapers    -- PageSelectors, extract_fields, WockaScraper
    controller  -- BatchController for barrier-joined concurrent batches
    dispatcher  -- Dispatcher batch loop and termination rule
    filters     -- LengthFilter for body length limits
    metrics     -- MetricsCollector for run totals
    models      -- JokeRecord, outcome variants, BatchState, ScrapeConfig
    storage     -- StorageBase and CsvStorage
    convert     -- CSV row count and CSV to JSON conversion
"""
