"""
                        Services Module

Contains the business logic services with the hybrid architecture pattern.
Each service has a local (no credential) and a real (production) implementation.

Services:
    - ai: Gemini prompt generation with local fallback answers
"""
