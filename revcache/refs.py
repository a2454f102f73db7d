"""Git references attached to commits.

Builds, from ``git show-ref -d`` output, a map from commit sha to the
tags, branches, remote branches and other refs pointing at it.

Contains:
- RefType: Kinds of reference a commit can carry
- Reference: References of one commit
- parse_show_ref: Build the sha -> Reference map
- check_ref: Test which kinds of reference a commit carries
- get_ref_names: List the reference names of a commit
"""

from dataclasses import dataclass, field
from enum import IntFlag


class RefType(IntFlag):
    NONE = 0
    TAG = 1
    BRANCH = 2
    RMT_BRANCH = 4
    CUR_BRANCH = 8
    REF = 16
    ANY_REF = TAG | BRANCH | RMT_BRANCH | CUR_BRANCH | REF


_TAGS_PREFIX = "refs/tags/"
_HEADS_PREFIX = "refs/heads/"
_REMOTES_PREFIX = "refs/remotes/"
_DEREF_SUFFIX = "^{}"


@dataclass
class Reference:
    """All references pointing at one commit."""

    type: RefType = RefType.NONE
    tags: list[str] = field(default_factory=list)
    branches: list[str] = field(default_factory=list)
    remote_branches: list[str] = field(default_factory=list)
    refs: list[str] = field(default_factory=list)
    tag_obj: str = ""  # sha of the annotated tag object, if any

    def configure(self, ref_name: str, is_current_branch: bool, prev_ref_sha: str) -> None:
        """Record one show-ref line pointing at this commit.

        Args:
            ref_name: Full ref name, e.g. ``refs/heads/main``.
            is_current_branch: Whether this commit is HEAD.
            prev_ref_sha: Sha of the previous show-ref line. For a ``^{}``
                line this is the annotated tag object.
        """
        if ref_name.startswith(_TAGS_PREFIX):
            if ref_name.endswith(_DEREF_SUFFIX):
                self.tags.append(ref_name[len(_TAGS_PREFIX):-len(_DEREF_SUFFIX)])
                self.tag_obj = prev_ref_sha
            else:
                self.tags.append(ref_name[len(_TAGS_PREFIX):])
            self.type |= RefType.TAG
        elif ref_name.startswith(_HEADS_PREFIX):
            self.branches.append(ref_name[len(_HEADS_PREFIX):])
            self.type |= RefType.BRANCH
            if is_current_branch:
                self.type |= RefType.CUR_BRANCH
        elif ref_name.startswith(_REMOTES_PREFIX) and not ref_name.endswith("HEAD"):
            self.remote_branches.append(ref_name[len(_REMOTES_PREFIX):])
            self.type |= RefType.RMT_BRANCH
        elif not ref_name.startswith("refs/bases/") and not ref_name.endswith("HEAD"):
            self.refs.append(ref_name)
            self.type |= RefType.REF


def parse_show_ref(output: str, head_sha: str) -> dict[str, Reference]:
    """Parse ``git show-ref -d`` output.

    An annotated tag is listed twice: first the tag object, then the
    peeled ``^{}`` line with the commit it points to. Only the commit
    keeps the tag; the entry created for the tag object is removed.

    Args:
        output: Raw show-ref output, one ``<sha> <ref>`` per line.
        head_sha: Sha of HEAD. It is flagged CUR_BRANCH even when detached.

    Returns:
        Map from commit sha to its Reference.
    """
    refs: dict[str, Reference] = {}
    prev_ref_sha = ""

    for line in output.split("\n"):
        if not line:
            continue
        sha, _, ref_name = line.partition(" ")

        cur = refs.setdefault(sha, Reference())
        cur.configure(ref_name, sha == head_sha, prev_ref_sha)

        if ref_name.startswith(_TAGS_PREFIX) and ref_name.endswith(_DEREF_SUFFIX) and prev_ref_sha:
            refs.pop(prev_ref_sha, None)

        prev_ref_sha = sha

    if head_sha:
        refs.setdefault(head_sha, Reference()).type |= RefType.CUR_BRANCH

    return refs


def check_ref(refs: dict[str, Reference], sha: str, mask: RefType = RefType.ANY_REF) -> RefType:
    """Return the reference kinds of sha that are in mask."""
    ref = refs.get(sha)
    return ref.type & mask if ref else RefType.NONE


def get_ref_names(refs: dict[str, Reference], sha: str, mask: RefType = RefType.ANY_REF) -> list[str]:
    """Return the names of the references of sha whose kind is in mask."""
    if not check_ref(refs, sha, mask):
        return []

    ref = refs[sha]
    result: list[str] = []
    if mask & RefType.TAG:
        result.extend(ref.tags)
    if mask & RefType.BRANCH:
        result.extend(ref.branches)
    if mask & RefType.RMT_BRANCH:
        result.extend(ref.remote_branches)
    if mask & RefType.REF:
        result.extend(ref.refs)
    return result
