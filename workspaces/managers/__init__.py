"""Record managers for the workspace registry.

Managers operate on a ``RegistryStore`` and raise domain exceptions
(``LookupError``, ``ValueError`` subclasses), never notifications -- that
translation is the facade's responsibility.
"""
