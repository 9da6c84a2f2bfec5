"""
Sample review batch for demos ("Try Sample Data").
"""

SAMPLE_REVIEWS = """2024-10-01: The product is amazing! Fast delivery and great quality.
2024-10-03: I had some issues with the customer support, they were quite slow to respond.
2024-10-05: Best purchase of the year. I love the new interface.
2024-10-07: The price is a bit high compared to competitors, but the build quality justifies it.
2024-10-10: Shipping took 2 weeks longer than expected. Very frustrating.
2024-10-12: The mobile app keeps crashing after the latest update. Fix it!
2024-10-15: Really helpful onboarding process. I was up and running in minutes.
2024-10-18: I miss some of the older features that were removed recently.
2024-10-20: Fantastic customer service! They solved my issue within an hour.
2024-10-22: The documentation is a bit outdated and hard to follow."""
