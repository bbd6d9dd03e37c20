"""
Sentiment agents: Groq client, prompt templates, and the headline analyzer.
"""
