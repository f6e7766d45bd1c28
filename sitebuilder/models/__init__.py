from sitebuilder.models.website_generation import WebsiteGeneration

__all__ = ["WebsiteGeneration"]
