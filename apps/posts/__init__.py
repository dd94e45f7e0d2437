"""
Posts App - Swipe Capacity Offers

A seller publishes a post offering a number of meal swipes. Buyers file
requests against it; each request reserves one unit of capacity at
creation time and releases it again on decline or cancel.

Architecture:
- Models: Post, PostStatus
- Services: post_management (CRUD), capacity (atomic reserve/release)
- Views: RESTful API with a ViewSet
"""
