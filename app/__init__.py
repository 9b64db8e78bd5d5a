"""
Fly Ambition API
Small backend for the Fly Ambition site.

Resources:
- Employment form submissions (MongoDB: formSubmissions) + email notification
- Education form submissions (MongoDB: applySubmissions) + email notification
- Testimonials with image upload (MongoDB: testimonials, files in uploads/)
"""

__version__ = "1.0.0"
