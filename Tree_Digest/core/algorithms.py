import functools
import hashlib
from dataclasses import dataclass, field
from typing import Any, Callable, List, Union

from Tree_Digest.core.errors import UnsupportedAlgorithm


@dataclass(frozen=True)
class DigestAlgorithm:
    """
    A named streaming hash function.

    The object itself holds no hashing state. Every call to new()
    returns an independent hasher exposing update() and digest(), so one
    DigestAlgorithm can be shared across runs without leaking state.

    Equality and hashing go by name only: two instances with the same
    name compare equal whatever their factories are.
    """
    name: str
    factory: Callable[[], Any] = field(compare=False, repr=False)

    def new(self):
        return self.factory()

    @property
    def digest_size(self) -> int:
        return self.new().digest_size

    def __str__(self) -> str:
        return self.name


MD5 = DigestAlgorithm("md5", hashlib.md5)
SHA256 = DigestAlgorithm("sha256", hashlib.sha256)
SHA512 = DigestAlgorithm("sha512", hashlib.sha512)

DEFAULT_ALGORITHM = SHA512

_PREDEFINED = {a.name: a for a in (MD5, SHA256, SHA512)}


def _candidates(name: str) -> List[str]:
    lowered = name.strip().lower()
    out = []
    for cand in (
        lowered,
        lowered.replace("-", "_"),
        lowered.replace("-", "").replace("_", ""),
    ):
        if cand and cand not in out:
            out.append(cand)
    return out


def get_algorithm(value: Union[str, DigestAlgorithm]) -> DigestAlgorithm:
    """
    Resolve a DigestAlgorithm from an instance or a name.

    Names are matched case-insensitively, so "SHA-512", "sha512" and
    "Sha512" all select the same function. Anything hashlib can build is
    accepted as long as it has a fixed digest length.

    Raises UnsupportedAlgorithm when the runtime cannot provide it.
    """
    if isinstance(value, DigestAlgorithm):
        return value

    if not isinstance(value, str) or not value.strip():
        raise UnsupportedAlgorithm(str(value))

    cands = _candidates(value)
    known = {n.lower() for n in hashlib.algorithms_available}
    # predefined first, then names hashlib advertises, then anything else
    cands.sort(key=lambda c: (c not in _PREDEFINED, c not in known))

    for cand in cands:
        algorithm = _PREDEFINED.get(cand) or DigestAlgorithm(
            cand, functools.partial(hashlib.new, cand)
        )

        try:
            probe = algorithm.new()
        except ValueError:
            # unknown to this build, or blocked (e.g. md5 under FIPS)
            continue

        # shake_* need an explicit length at digest() time
        if probe.digest_size == 0:
            raise UnsupportedAlgorithm(value)

        return algorithm

    raise UnsupportedAlgorithm(value)


def available_algorithms() -> List[str]:
    names = set()
    for name in hashlib.algorithms_available:
        try:
            get_algorithm(name)
        except UnsupportedAlgorithm:
            continue
        names.add(name.lower())
    return sorted(names)
