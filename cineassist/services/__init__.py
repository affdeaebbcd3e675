"""Search, conversation and answer services.

Pure helpers (no I/O):

- **conversation_resolver**: history + current input → base query and batch index
- **filter_extractor**: free text → discovery filters
- **result_aggregator**: deduplication and local pagination

Orchestration (async, provider-backed):

- **cascading_search**: ordered fallback search strategies and batch enrichment
- **answer_synthesizer**: completion-backed answer with a deterministic fallback
- **search_service**, **assistant_service**, **catalog_service**: the request paths
"""
