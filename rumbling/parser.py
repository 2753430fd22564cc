"""RAKE keyword extraction over stored page content."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rumbling.database import DataRow

STOPWORDS = frozenset(
    """
    i im ive ill id me my myself we wed were weve our ours ourselves you youre
    youve youll youd your yours yourself yourselves he hed hell hes him his
    himself she shed shell shes her hers herself it itd itll its itself they
    theyd theyll theyre theyve them their theirs themselves what whats which
    who whos whom this that thats these those am is are was be been being have
    has had having do does did doing a an the and but if or because as until
    while of at by for with about against between into through during before
    after above below to from up down in out on off over under again further
    then once here there when where why how all any both each few more most
    other some such no nor not only own same so than too very can will just
    dont doesnt didnt hasnt havent isnt wasnt wont would wouldnt could couldnt
    should shouldnt must mustnt let lets theres wouldve couldve shouldve s t
    don now
    """.split()
)

_PUNCT = re.compile(r"[.,?!]")


class ParseError(ValueError):
    """Raised when text cannot be processed into keywords."""


@dataclass
class ProcessedText:
    url: str
    delimited: list[str] = field(default_factory=list)


@dataclass
class CoGraph:
    url: str
    graph: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class WordScores:
    url: str
    scores: dict[str, float] = field(default_factory=dict)


@dataclass
class TermScores:
    url: str
    scores: dict[str, float] = field(default_factory=dict)


@dataclass
class Keywords:
    url: str
    keywords: list[str] = field(default_factory=list)


def delimit_by_punct(row: DataRow) -> ProcessedText:
    """Split content into sentences at punctuation."""
    if not row.content.strip():
        raise ParseError("unprocessed input")
    sentences = []
    for piece in _PUNCT.split(row.content):
        cleaned = piece.strip()
        if len(cleaned.encode()) > 1:
            sentences.append(cleaned)
    return ProcessedText(url=row.url, delimited=sentences)


def delimit_by_stop(doc: ProcessedText) -> ProcessedText:
    """Split sentences into candidate phrases at stop words."""
    terms = []
    for sent in doc.delimited:
        words = sent.split()
        if len(words) > 1:
            start = 0
            last = len(words) - 1
            for i, word in enumerate(words):
                if word in STOPWORDS:
                    phrase = " ".join(w for w in words[start:i] if w not in STOPWORDS).strip()
                    if phrase:
                        terms.append(phrase)
                    start = i + 1
                elif i == last:
                    terms.append(" ".join(words[start:]).strip())
        elif len(words) == 1:
            if sent not in STOPWORDS:
                terms.append(sent)
        else:
            raise ParseError("unprocessed input")
    return ProcessedText(url=doc.url, delimited=terms)


def co_occurrence(doc: ProcessedText) -> CoGraph:
    """Build the word co-occurrence graph of the candidate phrases."""
    graph: dict[str, list[str]] = {}
    for term in doc.delimited:
        words = term.split()
        if len(words) > 1:
            for word in words:
                graph.setdefault(word, [])
        elif len(words) == 1:
            graph.setdefault(term, [])
        else:
            raise ParseError("unprocessed input")

    for term in doc.delimited:
        words = term.split()
        if len(words) > 1:
            counts: dict[str, int] = {}
            for word in words:
                counts[word] = counts.get(word, 0) + 1
            unique = list(counts)
            for key, count in counts.items():
                if count == 1:
                    graph[key].extend(unique)
                else:
                    graph[key].extend([key] * count)
                    graph[key].extend(w for w in unique if w != key)
        elif len(words) == 1:
            graph[term].append(term)
    return CoGraph(url=doc.url, graph=graph)


def deg_freq_calc(graph: CoGraph) -> WordScores:
    """Score each word as its degree divided by its frequency."""
    scores = {}
    for key, neighbours in graph.graph.items():
        degree = float(len(neighbours))
        if degree == 0.0:
            raise ParseError("malformed co-occurence table")
        freq = float(sum(1 for word in neighbours if word == key))
        if freq == 0.0:
            raise ParseError("malformed co-occurence table")
        scores[key] = degree / freq
    return WordScores(url=graph.url, scores=scores)


def term_scoring(scores: WordScores, terms: ProcessedText) -> TermScores:
    """Score each phrase as the sum of its word scores."""
    if scores.url != terms.url:
        raise ParseError("url mismatch")
    used: set[str] = set()
    term_scores: dict[str, float] = {}
    for term in terms.delimited:
        words = term.split()
        if len(words) > 1:
            for word in words:
                if word not in scores.scores:
                    raise ParseError("word did not exist during scoring")
                used.add(word)
                term_scores[term] = term_scores.get(term, 0.0) + scores.scores[word]
        else:
            if term not in scores.scores:
                raise ParseError("word did not exist during scoring")
            used.add(term)
            term_scores[term] = scores.scores[term]
    if len(used) != len(scores.scores):
        raise ParseError("some scored words were not used")
    return TermScores(url=scores.url, scores=term_scores)


def filtering(scores: TermScores) -> Keywords:
    """Keep the top third of phrases by score (all of them when three or fewer)."""
    if len(scores.scores) <= 3:
        return Keywords(url=scores.url, keywords=list(scores.scores))
    ranked = sorted(scores.scores, key=scores.scores.__getitem__, reverse=True)
    taking = len(scores.scores) // 3
    return Keywords(url=scores.url, keywords=ranked[: taking + 1])


def rake(content: DataRow) -> Keywords:
    """Extract keywords from a stored page with the RAKE algorithm."""
    by_punct = delimit_by_punct(content)
    by_stop = delimit_by_stop(by_punct)
    graph = co_occurrence(by_stop)
    word_scores = deg_freq_calc(graph)
    term_scores = term_scoring(word_scores, by_stop)
    return filtering(term_scores)