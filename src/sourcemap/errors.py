"""Exceptions raised by source-map."""


class SourceMapError(Exception): ...
class InvalidRootError(SourceMapError): ...
class ProfileError(SourceMapError): ...
class ProfileNotFoundError(ProfileError): ...
class OutputError(SourceMapError): ...
