"""site_corpus.crawler: frontier, URL rules, robots.txt filter and the crawl loop."""
