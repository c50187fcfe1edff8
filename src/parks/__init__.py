"""Off-road park directory: reviews, moderation and park rating aggregates."""
