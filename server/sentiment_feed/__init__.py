"""
Sentiment Feed Service

Crypto news sentiment intelligence. Serves cached headline analyses from
Redis; when the store is empty, pulls the latest headlines from
CryptoCompare, scores each one with a Groq-hosted LLM, and writes the
results back.

Architecture:
    store (Redis) --hit--> display list
          +--miss--> news_client -> agents.sentiment (Groq) -> store

Components:
    - timefmt: relative-age labels for records
    - store: Redis and in-memory news stores
    - news_client: CryptoCompare HTTP client
    - orchestrator: cache-fill pass and page-instance feed model
    - view: terminal rendering of the stream
"""
