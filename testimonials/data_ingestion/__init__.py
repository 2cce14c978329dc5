"""
Testimonial ingestion package.

Responsibilities:
- Read the raw WordPress testimonial export.
- Validate ratings and normalize service types, flags and dates.
- Persist the processed snapshot read by the CSV review store.
"""
