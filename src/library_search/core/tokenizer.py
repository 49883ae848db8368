"""
Tokenizer for library documents and queries.

Tokenization pipeline:
1. CamelCase split ("GitRepository" -> "Git Repository"), before lowercasing
2. Lowercase conversion
3. Split on anything that is not a letter, digit or hyphen
   (hyphens are kept so "kustomize-controller" stays a single term)
4. Drop tokens shorter than 2 characters unless they are version tokens
5. Drop stop words
6. Apply Flux/Kubernetes aware stemming (version tokens are never stemmed)
"""

import re
from collections import Counter
from typing import Dict, Iterator, Set, Tuple

MIN_TOKEN_LENGTH = 2

STOP_WORDS = frozenset([
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to',
    'for', 'of', 'with', 'by', 'from', 'is', 'are', 'was', 'were', 'be',
    'been', 'being', 'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would',
    'could', 'should', 'may', 'might', 'must', 'can', 'this', 'that', 'these', 'those',
    'it', 'its', 'as', 'if', 'when', 'where', 'why', 'how', 'all', 'each',
    'every', 'both', 'few', 'more', 'most', 'other', 'some', 'such', 'no', 'nor',
    'not', 'only', 'own', 'same', 'so', 'than', 'too', 'very', 'just', 'now',
])

# First match wins: domain plurals, then generic suffixes from most to least specific.
STEM_RULES: Tuple[Tuple[str, str], ...] = (
    # Flux/K8s kinds
    ('repositories', 'repository'),
    ('kustomizations', 'kustomization'),
    ('helmreleases', 'helmrelease'),
    ('helmrepositories', 'helmrepository'),
    ('helmcharts', 'helmchart'),
    ('gitrepositories', 'gitrepository'),
    ('ocirepositories', 'ocirepository'),
    ('buckets', 'bucket'),
    ('receivers', 'receiver'),
    ('alerts', 'alert'),
    ('providers', 'provider'),
    ('imagerepositories', 'imagerepository'),
    ('imagepolicies', 'imagepolicy'),
    ('imageupdateautomations', 'imageupdateautomation'),
    ('artifactgenerators', 'artifactgenerator'),
    # General nouns
    ('reconciliations', 'reconciliation'),
    ('configurations', 'configuration'),
    ('authentications', 'authentication'),
    ('authorizations', 'authorization'),
    ('specifications', 'specification'),
    ('definitions', 'definition'),
    ('deployments', 'deployment'),
    ('namespaces', 'namespace'),
    ('certificates', 'certificate'),
    ('secrets', 'secret'),
    ('configmaps', 'configmap'),
    # Generic English plurals
    ('ies', 'y'),    # policies -> policy
    ('sses', 'ss'),  # processes -> process
    ('ches', 'ch'),  # patches -> patch
    ('shes', 'sh'),  # pushes -> push
    ('xes', 'x'),    # fixes -> fix
    ('zes', 'z'),    # buzzes -> buzz
    ('ses', 'se'),   # releases -> release
    ('s', ''),       # last resort
)

_CAMEL_CASE = re.compile(r'([a-z])([A-Z])')
_WORD_BOUNDARY = re.compile(r'[^a-zA-Z0-9-]+')


def is_version(token: str) -> bool:
    """
    Check whether a token looks like an API version (v1, v2beta3, v1alpha1).

    Examples:
        >>> is_version("v2beta3")
        True
        >>> is_version("values")
        False
    """
    return len(token) > 1 and token[0] == 'v' and token[1].isdigit()


def stem(term: str) -> str:
    """
    Reduce a lowercase term to its singular form using the ordered rule table.

    Examples:
        >>> stem("helmreleases")
        'helmrelease'
        >>> stem("policies")
        'policy'
        >>> stem("patches")
        'patch'
    """
    for suffix, replacement in STEM_RULES:
        if term.endswith(suffix):
            return term[:len(term) - len(suffix)] + replacement
    return term


def _iter_terms(text: str) -> Iterator[str]:
    """Yield normalized terms in document order, duplicates included."""
    if not text:
        return

    # CamelCase must be split while case information still exists
    text = _CAMEL_CASE.sub(r'\1 \2', text)
    text = text.lower()

    for word in _WORD_BOUNDARY.split(text):
        word = word.strip()
        if not word:
            continue

        version = is_version(word)
        if len(word) < MIN_TOKEN_LENGTH and not version:
            continue
        if word in STOP_WORDS:
            continue

        yield word if version else stem(word)


def tokenize_with_counts(text: str) -> Dict[str, int]:
    """
    Tokenize text into a term -> occurrence count mapping.

    Counts are taken after filtering and stemming, so "patches patch"
    yields {"patch": 2}. Used when building the inverted index.
    """
    return dict(Counter(_iter_terms(text)))


def tokenize(text: str) -> Set[str]:
    """
    Tokenize text into a set of normalized terms.

    Examples:
        >>> sorted(tokenize("GitRepository with SSH keys"))
        ['git', 'key', 'repository', 'ssh']
        >>> tokenize("the and for")
        set()
    """
    return set(_iter_terms(text))
