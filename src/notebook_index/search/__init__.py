"""
In-memory matching, ranking and similarity for notes.

This package provides the pure-Python search core:
- analyzers: Tokenizers, stopwords, wiki-link parsing, word boundaries
- ranges: Highlight ranges and range compression
- fuzzy: In-order subsequence matching
- title_matcher / content_matcher: Per-note match strategies
- snippet: Snippet windows and highlight rendering
- derived_index / index_cache: One-pass derived index and its lazy cache
- ranking, similarity, backlinks, link_suggestions: Query-level operations
- recency: Recency boost and weak-query detection
"""
