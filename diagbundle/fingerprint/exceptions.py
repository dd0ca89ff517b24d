from diagbundle.exceptions import BundleError


class FingerprintError(BundleError):
    """Raised when a statement cannot be reduced to a fingerprint."""
