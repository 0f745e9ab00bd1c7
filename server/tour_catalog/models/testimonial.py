"""Testimonial document definitions."""

TESTIMONIAL_COLLECTION = "testimonial"
