"""
Listing analytics.

Responsibilities:
- Keep a bounded in-process log of listing requests and store failures.
- Summarize filter usage, paging depth and response times for admins.
"""
