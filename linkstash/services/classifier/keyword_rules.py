"""Keyword tables for the heuristic classifier.

Each table is plain data: ``(pattern, label)`` pairs compiled once at
import.  Order matters everywhere:

- ``TAG_GROUPS``: groups are evaluated in order and, inside a group, the
  first matching rule wins, so a group contributes at most one tag.
- ``CATEGORY_RULES``: the first category with any matching pattern wins.

English keywords are wrapped in word boundaries.  Korean keywords are
matched as plain substrings because particles attach directly to words.
"""

import re
from dataclasses import dataclass


def _words(*words: str) -> str:
    """Word-boundary alternation for English keywords (regex syntax allowed)."""
    return r"\b(?:" + "|".join(words) + r")\b"


def _any(*fragments: str) -> str:
    return "(?:" + "|".join(fragments) + ")"


@dataclass(frozen=True)
class KeywordRule:
    pattern: re.Pattern
    label: str


@dataclass(frozen=True)
class KeywordGroup:
    name: str
    rules: tuple[KeywordRule, ...]

    def first_match(self, text: str) -> str | None:
        for rule in self.rules:
            if rule.pattern.search(text):
                return rule.label
        return None


def _group(name: str, pairs: list[tuple[str, str]]) -> KeywordGroup:
    return KeywordGroup(
        name=name,
        rules=tuple(KeywordRule(re.compile(p, re.IGNORECASE), label) for p, label in pairs),
    )


# ---------------------------------------------------------------------------
# Tag groups
# ---------------------------------------------------------------------------
_TAG_TABLE: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "languages-frameworks",
        [
            (_words(r"typescript", r"ts"), "typescript"),
            (_words(r"next\.?js"), "nextjs"),
            (_words(r"react(?:\.?js)?", r"react native"), "react"),
            (_words(r"vue(?:\.?js)?", r"nuxt"), "vue"),
            (_words(r"angular"), "angular"),
            (_words(r"svelte(?:kit)?"), "svelte"),
            (_words(r"node\.?js", r"deno", r"bun"), "nodejs"),
            (_words(r"javascript", r"js"), "javascript"),
            (_words(r"python", r"django", r"fastapi", r"flask"), "python"),
            (_words(r"golang"), "golang"),
            (_words(r"rust"), "rust"),
            (_words(r"java", r"spring boot", r"kotlin"), "java"),
            (_words(r"swift", r"swiftui"), "swift"),
            (_words(r"flutter", r"dart"), "flutter"),
            (_words(r"css", r"tailwind"), "css"),
            (_words(r"sql", r"postgres(?:ql)?", r"mysql"), "database"),
            (_any(r"프로그래밍", r"코딩"), "programming"),
            (_any(r"개발"), "development"),
        ],
    ),
    (
        "ai-ml",
        [
            (_words(r"llms?", r"large language models?"), "llm"),
            (_words(r"chatgpt", r"gpt-?\d*", r"openai"), "chatgpt"),
            (_words(r"claude", r"anthropic"), "claude"),
            (_words(r"rag", r"retrieval[- ]augmented"), "rag"),
            (_words(r"machine learning", r"ml"), "machine-learning"),
            (_words(r"deep learning", r"neural networks?", r"pytorch", r"tensorflow"), "deep-learning"),
            (_words(r"ai", r"artificial intelligence", r"agents?"), "ai"),
            (_any(r"인공지능", r"바이브코딩", r"바이브 코딩"), "ai"),
        ],
    ),
    (
        "cloud-devops",
        [
            (_words(r"kubernetes", r"k8s", r"helm"), "kubernetes"),
            (_words(r"docker", r"containers?"), "docker"),
            (_words(r"terraform", r"infrastructure as code"), "terraform"),
            (_words(r"aws", r"amazon web services", r"lambda"), "aws"),
            (_words(r"gcp", r"google cloud"), "gcp"),
            (_words(r"azure"), "azure"),
            (_words(r"ci/cd", r"ci", r"github actions", r"jenkins"), "ci-cd"),
            (_words(r"devops", r"sre", r"observability"), "devops"),
            (_words(r"serverless"), "serverless"),
            (_words(r"linux"), "linux"),
        ],
    ),
    (
        "design",
        [
            (_words(r"figma", r"sketch"), "figma"),
            (_words(r"design systems?"), "design-system"),
            (_words(r"ui", r"ux", r"user experience", r"user interface"), "ui-ux"),
            (_words(r"typography", r"fonts?"), "typography"),
            (_words(r"illustration", r"photoshop", r"adobe"), "graphics"),
            (_words(r"design"), "design"),
            (_any(r"디자인"), "design"),
        ],
    ),
    (
        "business",
        [
            (_words(r"startups?", r"founders?", r"entrepreneur\w*"), "startup"),
            (_any(r"스타트업", r"창업"), "startup"),
            (_words(r"saas"), "saas"),
            (_words(r"marketing", r"branding"), "marketing"),
            (_any(r"마케팅"), "marketing"),
            (_words(r"seo"), "seo"),
            (_words(r"product management", r"product managers?", r"roadmap"), "product"),
            (_words(r"growth", r"retention"), "growth"),
            (_words(r"invest\w*", r"finance", r"fundraising", r"venture capital"), "finance"),
            (_words(r"business", r"strategy"), "business"),
            (_any(r"비즈니스", r"사업"), "business"),
        ],
    ),
    (
        "learning-productivity",
        [
            (_words(r"productivity", r"time management"), "productivity"),
            (_any(r"생산성"), "productivity"),
            (_words(r"notion", r"obsidian", r"note[- ]taking"), "note-taking"),
            (_words(r"automation", r"workflows?", r"zapier"), "automation"),
            (_any(r"자동화"), "automation"),
            (_words(r"tutorial", r"how to", r"step[- ]by[- ]step"), "tutorial"),
            (_any(r"튜토리얼", r"강의"), "tutorial"),
            (_words(r"guide", r"handbook"), "guide"),
            (_any(r"가이드"), "guide"),
            (_words(r"career", r"interview", r"resume"), "career"),
            (_any(r"커리어", r"이직"), "career"),
            (_words(r"learn\w*", r"course", r"education"), "learning"),
            (_any(r"학습", r"교육", r"공부"), "learning"),
        ],
    ),
]

TAG_GROUPS: tuple[KeywordGroup, ...] = tuple(
    _group(name, pairs) for name, pairs in _TAG_TABLE
)

# Hosting platforms, matched against the URL host and tested after TAG_GROUPS
SITE_GROUP: KeywordGroup = _group(
    "site",
    [
        (r"(?:^|\.)github\.com$", "github"),
        (r"(?:^|\.)stackoverflow\.com$", "stackoverflow"),
        (r"(?:^|\.)medium\.com$", "medium"),
        (r"(?:^|\.)dev\.to$", "devto"),
        (r"(?:^|\.)velog\.io$", "velog"),
        (r"(?:^|\.)tistory\.com$", "tistory"),
        (r"(?:^|\.)brunch\.co\.kr$", "brunch"),
        (r"(?:^|\.)youtube\.com$|(?:^|\.)youtu\.be$", "video"),
    ],
)

# ---------------------------------------------------------------------------
# Category rules (priority order: Technology → Design → Business → Productivity)
# ---------------------------------------------------------------------------
_CATEGORY_TABLE: list[tuple[str, str]] = [
    (
        "Technology",
        _words(
            r"programming", r"software", r"developers?", r"development", r"code",
            r"coding", r"api", r"database", r"javascript", r"typescript", r"react",
            r"vue", r"angular", r"node\.?js", r"python", r"golang", r"rust", r"java",
            r"kubernetes", r"docker", r"cloud", r"devops", r"aws", r"linux", r"web",
            r"mobile", r"ai", r"llms?", r"machine learning", r"open source", r"github",
            r"frontend", r"backend", r"security",
        ),
    ),
    ("Technology", _any(r"개발", r"코딩", r"프로그래밍", r"기술", r"인공지능", r"바이브코딩")),
    (
        "Design",
        _words(
            r"design", r"ui", r"ux", r"figma", r"typography", r"illustration",
            r"branding", r"color", r"layout", r"photoshop",
        ),
    ),
    ("Design", _any(r"디자인")),
    (
        "Business",
        _words(
            r"business", r"startups?", r"entrepreneur\w*", r"marketing", r"saas",
            r"sales", r"strategy", r"product management", r"finance", r"invest\w*",
            r"growth", r"seo", r"revenue",
        ),
    ),
    ("Business", _any(r"비즈니스", r"창업", r"스타트업", r"마케팅", r"사업")),
    (
        "Productivity",
        _words(
            r"productivity", r"habits?", r"focus", r"notion", r"obsidian",
            r"workflows?", r"automation", r"time management", r"tutorial", r"guide",
            r"learn\w*", r"tips",
        ),
    ),
    ("Productivity", _any(r"생산성", r"자동화", r"습관", r"학습")),
]

CATEGORY_RULES: tuple[KeywordRule, ...] = tuple(
    KeywordRule(re.compile(p, re.IGNORECASE), label) for label, p in _CATEGORY_TABLE
)

# ---------------------------------------------------------------------------
# Meaningful-word fallback
# ---------------------------------------------------------------------------
MIN_WORD_LENGTH = 3  # exclusive
MAX_WORD_LENGTH = 15  # exclusive
MAX_FALLBACK_WORDS = 2

STOPWORDS: frozenset[str] = frozenset(
    {
        "about", "after", "again", "also", "been", "before", "being", "best",
        "between", "both", "could", "does", "doing", "each", "every", "from",
        "have", "here", "into", "just", "know", "like", "made", "make", "many",
        "more", "most", "much", "must", "need", "only", "other", "over", "should",
        "some", "such", "than", "that", "their", "them", "then", "there", "these",
        "they", "this", "those", "through", "under", "very", "want", "what",
        "when", "where", "which", "while", "will", "with", "without", "would",
        "your", "yours", "home", "page", "index", "welcome", "official", "site",
        "website", "blog", "post", "article", "untitled",
    }
)
