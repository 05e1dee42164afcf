"""
Ingestion — document loading, chunking, embedding and upsert into the vector index.

This module is responsible for the ETL-like pipeline that converts local
documents (text, Markdown, PDF) into embedded chunks stored in the
external vector index.
"""
