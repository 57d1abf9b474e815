from archiver.sources.rest_api import RestAPISource, create_rest_api_source

__all__ = ["RestAPISource", "create_rest_api_source"]
