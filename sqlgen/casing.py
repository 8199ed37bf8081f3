"""Identifier case conversion and English singularisation."""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[_\-\s]+")
_BOUNDARIES = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _split_words(text: str) -> list[str]:
    return [
        word
        for chunk in _SEPARATORS.split(text)
        for word in _BOUNDARIES.split(chunk)
        if word
    ]


def to_pascal_case(text: str) -> str:
    """Convert ``some_name`` or ``someName`` to ``SomeName``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in _split_words(text))


def to_snake_case(text: str) -> str:
    """Convert ``SomeName`` or ``some-name`` to ``some_name``."""
    return "_".join(word.lower() for word in _split_words(text))


_UNCOUNTABLE_WORDS = frozenset(
    """
    adulthood advice agenda aid aircraft alcohol ammo analytics anime athletics
    audio bison blood bream buffalo butter carp cash chassis chess clothing cod
    commerce cooperation corps debris diabetes digestion elk energy equipment
    excretion expertise firmware flounder fun gallows garbage graffiti hardware
    headquarters health herpes highjinks homework housework information jeans
    justice kudos labour literature machinery mackerel mail media mews moose
    music mud manga news only personnel pike plankton pliers police pollution
    premises rain research rice salmon scissors series sewage shambles shrimp
    software staff species subck swine tennis traffic transportation trout tuna
    wealth welfare whiting wildebeest wildlife you
    """.split()
)

_IRREGULARS = [
    ("I", "we"), ("me", "us"), ("he", "they"), ("she", "they"), ("them", "them"),
    ("myself", "ourselves"), ("yourself", "yourselves"), ("itself", "themselves"),
    ("herself", "themselves"), ("himself", "themselves"), ("themself", "themselves"),
    ("is", "are"), ("was", "were"), ("has", "have"), ("this", "these"),
    ("that", "those"), ("my", "our"), ("its", "their"), ("his", "their"),
    ("her", "their"), ("echo", "echoes"), ("dingo", "dingoes"),
    ("volcano", "volcanoes"), ("tornado", "tornadoes"), ("torpedo", "torpedoes"),
    ("genus", "genera"), ("viscus", "viscera"), ("stigma", "stigmata"),
    ("stoma", "stomata"), ("dogma", "dogmata"), ("lemma", "lemmata"),
    ("schema", "schemata"), ("anathema", "anathemata"), ("ox", "oxen"),
    ("axe", "axes"), ("die", "dice"), ("yes", "yeses"), ("foot", "feet"),
    ("eave", "eaves"), ("goose", "geese"), ("tooth", "teeth"), ("quiz", "quizzes"),
    ("human", "humans"), ("proof", "proofs"), ("carve", "carves"),
    ("valve", "valves"), ("looey", "looies"), ("thief", "thieves"),
    ("groove", "grooves"), ("pickaxe", "pickaxes"), ("passerby", "passersby"),
    ("canvas", "canvases"),
]
_IRREGULAR_SINGLES = {single.lower(): single for single, _ in _IRREGULARS}
_IRREGULAR_PLURALS = {plural.lower(): single for single, plural in _IRREGULARS}

_RULES_SOURCE = [
    (r"s$", ""),
    (r"(ss)$", "$1"),
    (r"(wi|kni|(?:after|half|high|low|mid|non|night|[^\w]|^)li)ves$", "$1fe"),
    (r"(ar|(?:wo|[ae])l|[eo][ao])ves$", "$1f"),
    (r"ies$", "y"),
    (r"(dg|ss|ois|lk|ok|wn|mb|th|ch|ec|oal|is|ck|ix|sser|ts|wb)ies$", "$1ie"),
    (
        r"\b(l|(?:neck|cross|hog|aun)?t|coll|faer|food|gen|goon|group|hipp|junk|vegg"
        r"|(?:pork)?p|charl|calor|cut)ies$",
        "$1ie",
    ),
    (r"\b(mon|smil)ies$", "$1ey"),
    (r"\b((?:tit)?m|l)ice$", "$1ouse"),
    (r"(seraph|cherub)im$", "$1"),
    (
        r"(x|ch|ss|sh|zz|tto|go|cho|alias|[^aou]us|t[lm]as|gas|(?:her|at|gr)o"
        r"|[aeiou]ris)(?:es)?$",
        "$1",
    ),
    (r"(analy|diagno|parenthe|progno|synop|the|empha|cri|ne)(?:sis|ses)$", "$1sis"),
    (r"(movie|twelve|abuse|e[mn]u)s$", "$1"),
    (r"(test)(?:is|es)$", "$1is"),
    (
        r"(alumn|syllab|vir|radi|nucle|fung|cact|stimul|termin|bacill|foc|uter|loc"
        r"|strat)(?:us|i)$",
        "$1us",
    ),
    (
        r"(agend|addend|millenni|dat|extrem|bacteri|desiderat|strat|candelabr|errat"
        r"|ov|symposi|curricul|quor)a$",
        "$1um",
    ),
    (
        r"(apheli|hyperbat|periheli|asyndet|noumen|phenomen|criteri|organ"
        r"|prolegomen|hedr|automat)a$",
        "$1on",
    ),
    (r"(alumn|alg|vertebr)ae$", "$1a"),
    (r"(cod|mur|sil|vert|ind)ices$", "$1ex"),
    (r"(matr|append)ices$", "$1ix"),
    (r"(pe)(rson|ople)$", "$1rson"),
    (r"(child)ren$", "$1"),
    (r"(eau)x?$", "$1"),
    (r"men$", "man"),
    # Words that are the same in both numbers.
    (r"pok[eé]mon$", "$0"),
    (r"[^aeiou]ese$", "$0"),
    (r"deer$", "$0"),
    (r"fish$", "$0"),
    (r"measles$", "$0"),
    (r"o[iu]s$", "$0"),
    (r"pox$", "$0"),
    (r"sheep$", "$0"),
]
# Later rules take precedence, so they are tried first.
_SINGULAR_RULES = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in reversed(_RULES_SOURCE)
]
_GROUP_REF = re.compile(r"\$(\d{1,2})")


def _restore_case(word: str, token: str) -> str:
    if word == token:
        return token
    if word == word.lower():
        return token.lower()
    if word == word.upper():
        return token.upper()
    if word[:1] == word[:1].upper():
        return token[:1].upper() + token[1:].lower()
    return token.lower()


def _apply_rule(word: str, pattern: re.Pattern[str], replacement: str) -> str:
    def substitute(match: re.Match[str]) -> str:
        result = _GROUP_REF.sub(lambda ref: match.group(int(ref.group(1))) or "", replacement)
        matched = match.group(0)
        if not matched:
            start = match.start()
            return _restore_case(word[start - 1] if start else "", result)
        return _restore_case(matched, result)

    return pattern.sub(substitute, word, count=1)


def singularize(word: str) -> str:
    """Return the singular form of an English word, keeping its capitalisation."""
    token = word.lower()
    if token in _IRREGULAR_SINGLES:
        return _restore_case(word, token)
    if token in _IRREGULAR_PLURALS:
        return _restore_case(word, _IRREGULAR_PLURALS[token])
    if not token or token in _UNCOUNTABLE_WORDS:
        return word
    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(word):
            return _apply_rule(word, pattern, replacement)
    return word