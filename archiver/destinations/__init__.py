from archiver.destinations.s3 import S3Destination

__all__ = ["S3Destination"]
