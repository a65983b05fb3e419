"""Business logic services.

Services contain all scoring and ranking logic and are called by routes.
Scoring and ranking are pure; storage is passed in explicitly.
"""
