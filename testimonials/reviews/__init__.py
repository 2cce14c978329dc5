"""
Client testimonial review engine.

Responsibilities:
- Load the current snapshot of published testimonials from a store adapter.
- Summarize the full collection (average rating, histogram, featured count).
- Filter by rating threshold and service type, rank, and paginate.
- Select the featured subset shown ahead of the general list.
"""
