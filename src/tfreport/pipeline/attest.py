"""Binary authorization attestation of deployed images.

After a dev/test apply the deployed image is attested once per
environment. The attestor and its signing key are named after the
environment:

    attestor  Deploy-<env>
    key       Deploy-<env>-Key  (keyring Attestor-Keyring, europe-north1)
"""

from __future__ import annotations

KEY_LOCATION = "europe-north1"
KEYRING = "Attestor-Keyring"
KEY_VERSION = "1"


def needs_digest(image_url: str) -> bool:
    """A tag URL (registry/repo:tag) must be resolved to a digest first."""
    return "@" not in image_url


def image_digest_url(image_url: str, digest: str | None = None) -> str:
    """Return the registry/repo@digest form of an image URL.

    A URL already pinned by digest is returned as is. Otherwise the tag
    after the last ':' is dropped and the digest appended.

    Raises:
        ValueError: If the URL is a tag URL and no digest is given.
    """
    if not needs_digest(image_url):
        return image_url
    if not digest:
        raise ValueError(f"Image {image_url!r} is not pinned and no digest was given")
    base = image_url.rsplit(":", 1)[0]
    return f"{base}@{digest}"


def attestor_name(environment: str) -> str:
    return f"Deploy-{environment}"


def attestor_path(project_id: str, environment: str) -> str:
    """Fully qualified attestor used when listing attestations."""
    return f"projects/{project_id}/attestors/{attestor_name(environment)}"


def key_name(environment: str) -> str:
    return f"Deploy-{environment}-Key"


def should_sign(existing_attestation: str) -> bool:
    """Sign only when listing the attestor's attestations returned nothing."""
    return existing_attestation.strip() == ""
