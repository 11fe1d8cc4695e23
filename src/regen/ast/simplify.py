"""Rewrite counted repetitions into star/plus/quest chains.

``x{2,4}`` becomes ``xx(x(x)?)?``. Note that this tends to produce less
variance in the generated strings: every level of the chain is a coin toss
that skips the rest of the chain when it fails.
"""

from __future__ import annotations

from regen.ast import nodes


def _body(subs: tuple[nodes.Node, ...]) -> nodes.Node:
    if len(subs) == 1:
        return subs[0]
    return nodes.Concat(subs)


def _repeat(node: nodes.Repeat, sub: nodes.Node) -> nodes.Node:
    lo, hi = node.min, node.max

    if hi == -1:
        if lo == 0:
            return nodes.Star((sub,))
        if lo == 1:
            return nodes.Plus((sub,))
        return nodes.Concat((sub,) * (lo - 1) + (nodes.Plus((sub,)),))

    if lo == 0 and hi == 0:
        return nodes.EmptyMatch()
    if lo == 1 and hi == 1:
        return sub

    prefix: tuple[nodes.Node, ...] = (sub,) * lo
    if hi > lo:
        suffix: nodes.Node = nodes.Quest((sub,))
        for _ in range(lo + 1, hi):
            suffix = nodes.Quest((sub, suffix))
        prefix += (suffix,)
    if len(prefix) == 1:
        return prefix[0]
    return nodes.Concat(prefix)


def simplify(node: nodes.Node) -> nodes.Node:
    """Return an equivalent tree without ``{m,n}`` repetitions.

    The input tree is left untouched.
    """
    if isinstance(node, nodes.Repeat):
        return _repeat(node, simplify(_body(node.subs)))

    if isinstance(node, (nodes.Star, nodes.Plus, nodes.Quest)):
        sub = simplify(_body(node.subs))
        if isinstance(sub, nodes.EmptyMatch):
            return sub
        # (x*)* and friends are equivalent to the inner node.
        if type(sub) is type(node):
            return sub
        return type(node)((sub,))

    if isinstance(node, nodes.Capture):
        return nodes.Capture(tuple(simplify(sub) for sub in node.subs), node.index, node.name)

    if isinstance(node, (nodes.Concat, nodes.Alternate)):
        return type(node)(tuple(simplify(sub) for sub in node.subs))

    return node
