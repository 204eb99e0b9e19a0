"""Search index documents for images and the services that build and publish them."""
