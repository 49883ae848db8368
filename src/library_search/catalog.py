"""
Catalog of Flux API reference documents and local corpus loading.

The catalog only describes documents; bodies are downloaded by an offline
step and read here from a local directory.
"""

import logging
from pathlib import Path, PurePosixPath
from typing import List, Sequence, Tuple
from urllib.parse import urlparse

from .core.exceptions import DocumentProcessingError
from .models.document import DocumentMetadata

logger = logging.getLogger(__name__)

SOURCE_GROUP = "source.toolkit.fluxcd.io"
SOURCE_EXTENSIONS_GROUP = "source.extensions.fluxcd.io"
KUSTOMIZE_GROUP = "kustomize.toolkit.fluxcd.io"
HELM_GROUP = "helm.toolkit.fluxcd.io"
NOTIFICATION_GROUP = "notification.toolkit.fluxcd.io"
IMAGE_GROUP = "image.toolkit.fluxcd.io"
OPERATOR_GROUP = "fluxcd.controlplane.io"

_FLUXCD_DOCS = "https://raw.githubusercontent.com/fluxcd"
_OPERATOR_DOCS = "https://raw.githubusercontent.com/controlplaneio-fluxcd/flux-operator/refs/heads/main/docs/api/v1"


def _entry(url: str, group: str, kind: str, keywords: str) -> DocumentMetadata:
    return DocumentMetadata(group=group, kind=kind, url=url, keywords=tuple(keywords.split()))


DEFAULT_CATALOG: Tuple[DocumentMetadata, ...] = (
    _entry(
        f"{_FLUXCD_DOCS}/source-controller/refs/heads/main/docs/spec/v1/gitrepositories.md",
        SOURCE_GROUP, "GitRepository",
        "source-controller git branch commit sha ref tag semver verification pgp "
        "signature ssh private public tls auth include submodules sparse checkout "
        "proxy ignore github gitlab devops githubapp",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/source-controller/refs/heads/main/docs/spec/v1/ocirepositories.md",
        SOURCE_GROUP, "OCIRepository",
        "source-controller oci registry artifact tag semver digest verification cosign "
        "notation signature keyless layer proxy media auth provider aws azure gcp "
        "identity iam tls",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/source-controller/refs/heads/main/docs/spec/v1/helmrepositories.md",
        SOURCE_GROUP, "HelmRepository",
        "source-controller index.yaml authentication",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/source-controller/refs/heads/main/docs/spec/v1/helmcharts.md",
        SOURCE_GROUP, "HelmChart",
        "source-controller chart valuesfiles strategy version",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/source-controller/refs/heads/main/docs/spec/v1/buckets.md",
        SOURCE_GROUP, "Bucket",
        "source-controller s3 storage minio blob endpoint region insecure "
        "managed-identity sas token certificate proxy authentication provider aws azure gcp",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/source-watcher/refs/heads/main/docs/spec/v1beta1/artifactgenerators.md",
        SOURCE_EXTENSIONS_GROUP, "ArtifactGenerator",
        "source-watcher artifact generator external composition decomposition multiple "
        "copy alias originrevision exclude extension",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/kustomize-controller/refs/heads/main/docs/spec/v1/kustomizations.md",
        KUSTOMIZE_GROUP, "Kustomization",
        "kustomize-controller kustomize git oci retry wait timeout validation health cel "
        "drift patches substitution variables target sourceref path depends build "
        "inventory prune encryption decryption sops age kms pgp kubeconfig "
        "impersonation tenant deploy manifest yaml apply",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/helm-controller/refs/heads/main/docs/spec/v2/helmreleases.md",
        HELM_GROUP, "HelmRelease",
        "helm-controller helm chart release values upgrade install uninstall rollback "
        "test remediation drift detection kubeconfig target storage timeout renderer "
        "depends retry tenant",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/notification-controller/refs/heads/main/docs/spec/v1/receivers.md",
        NOTIFICATION_GROUP, "Receiver",
        "notification-controller webhook receiver hmac trigger github gitlab bitbucket "
        "harbor cdevents payload",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/notification-controller/refs/heads/main/docs/spec/v1beta3/alerts.md",
        NOTIFICATION_GROUP, "Alert",
        "notification-controller alerting event notification observability incident "
        "error info severity",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/notification-controller/refs/heads/main/docs/spec/v1beta3/providers.md",
        NOTIFICATION_GROUP, "Provider",
        "notification-controller alert notification slack teams pagerduty discord matrix "
        "lark rocket datadog grafana sentry telegram webex nats pubsub eventhub dispatch",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/image-reflector-controller/refs/heads/main/docs/spec/v1/imagerepositories.md",
        IMAGE_GROUP, "ImageRepository",
        "image-reflector-controller container image tags docker ecr gar acr scan",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/image-reflector-controller/refs/heads/main/docs/spec/v1/imagepolicies.md",
        IMAGE_GROUP, "ImagePolicy",
        "image-reflector-controller container image policy tag semver range numerical "
        "alphabetical order filter pattern regex latest",
    ),
    _entry(
        f"{_FLUXCD_DOCS}/image-automation-controller/refs/heads/main/docs/spec/v1/imageupdateautomations.md",
        IMAGE_GROUP, "ImageUpdateAutomation",
        "image-automation-controller docker container image tag policy update commit "
        "push git scan automation automate",
    ),
    _entry(
        f"{_OPERATOR_DOCS}/fluxinstance.md",
        OPERATOR_GROUP, "FluxInstance",
        "flux-operator distribution registry components sync cluster storage multitenant "
        "network controller domain sharding migrate bootstrap cve auto deploy",
    ),
    _entry(
        f"{_OPERATOR_DOCS}/fluxreport.md",
        OPERATOR_GROUP, "FluxReport",
        "flux-operator report monitor stats readiness metric prometheus entitlement size "
        "info troubleshooting",
    ),
    _entry(
        f"{_OPERATOR_DOCS}/resourceset.md",
        OPERATOR_GROUP, "ResourceSet",
        "flux-operator resource inputs template templating common depends wait timeout "
        "account health cel prune inventory app definition",
    ),
    _entry(
        f"{_OPERATOR_DOCS}/resourcesetinputprovider.md",
        OPERATOR_GROUP, "ResourceSetInputProvider",
        "flux-operator input provider pull merge request author github gitlab filter "
        "labels branch exclude default exported preview ephemeral environment",
    ),
)


def document_filename(metadata: DocumentMetadata) -> str:
    """File name of the document body, taken from the last URL path segment."""
    name = PurePosixPath(urlparse(metadata.url).path).name
    if not name:
        raise DocumentProcessingError(f"Cannot derive a file name from URL: {metadata.url!r}")
    return name


def document_id_for(metadata: DocumentMetadata) -> str:
    """
    Stable document identifier derived from the URL.

    Examples:
        >>> document_id_for(DEFAULT_CATALOG[0])
        'gitrepositories'
    """
    return PurePosixPath(document_filename(metadata)).stem


def load_corpus(
    directory: Path,
    catalog: Sequence[DocumentMetadata] = DEFAULT_CATALOG
) -> List[Tuple[str, str, DocumentMetadata]]:
    """
    Read downloaded document bodies for every catalog entry.

    Args:
        directory: Directory holding one file per catalog URL, named after the
            URL's last path segment
        catalog: Document metadata, in the order documents should be indexed

    Returns:
        Index build entries in catalog order

    Raises:
        DocumentProcessingError: If a body is missing or unreadable
    """
    directory = Path(directory)
    entries = []

    for metadata in catalog:
        path = directory / document_filename(metadata)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read document body {path}: {str(e)}")
            raise DocumentProcessingError(f"Failed to read {path}: {str(e)}")

        entries.append((document_id_for(metadata), content, metadata))

    logger.info(f"Loaded {len(entries)} documents from {directory}")
    return entries
