"""Data ingestion pipeline.

This module reads raw CSV and spreadsheet sources and normalizes them.
It produces immutable canonical tables for transforms and the store layer.
"""
