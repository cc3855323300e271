# %% [markdown]
# # clipfzf: Quickstart
#
# **Type three letters, find the thing you copied an hour ago**
#
# ---
#
# ## The Problem
#
# Clipboard history fills up fast with commands, URLs, paths and snippets.
# Scrolling is slow; typing the exact text is impossible. What you remember
# is a few characters in order:
#
# ```
# "gsp"   ->  "git stash pop"
# "kgp"   ->  "kubectl get pods -n kube-system"
# "rm"    ->  "README.md"
# ```
#
# **clipfzf** ranks history fzf-style: the query must appear in the entry as a
# case-insensitive subsequence, and matches at the start of the text, after a
# separator, or on a camelCase hump score higher than matches buried mid-word.
#
# ---
#
# ## Table of Contents
#
# | Part | Topic | Description |
# |------|-------|-------------|
# | 1 | Scoring | Score vectors, bonuses, best scores |
# | 2 | Ranking | Lists, batch scoring, empty queries |
# | 3 | History Index | Entries, recency, images, persistence |
# | 4 | Polars | Expression namespace and DataFrame ranking |
# | 5 | Configuration | Threads and logging |

# %%
import logging

import polars as pl

import clipfzf as cf
from clipfzf import batch

# %% [markdown]
# ---
# ## Part 1: Scoring
#
# `score_text` returns one value per character of the text: the best score
# of an alignment of the whole query that ends on that character, or
# `NO_SCORE` where none does.

# %%
print(cf.compute_bonus("my_fileName"))
print(cf.score_text("abcdef", "ace"))
print(f"best: {cf.fzf_score('abcdef', 'ace')}")

# %% [markdown]
# Boundaries and camelCase humps are worth more than mid-word matches:

# %%
for text, query in [("hello_world", "hw"), ("helloWorld", "hW"), ("helloworld", "hw")]:
    print(f"  {text!r:15} {query!r:5} -> {cf.fzf_score(text, query)}")

print(f"no match: {cf.is_match(cf.fzf_score('hello', 'xyz'))}")

# %% [markdown]
# ---
# ## Part 2: Ranking

# %%
history = [
    "git status",
    "git stash pop",
    "docker compose up -d",
    "https://github.com/user/repo/pull/42",
    "kubectl get pods -n kube-system",
    "README.md",
]

for m in cf.find_best_matches(history, "gsp"):
    print(f"  [{m.score:3}] {m.text}")

# %% [markdown]
# The batch module gives the same answers; large lists are scored on a
# thread pool.

# %%
print(batch.score_matrix(["gsp", "rm"], history))
print(cf.extract_one("kgp", history))

# %% [markdown]
# An empty query matches everything with score 0, unless you ask otherwise:

# %%
print(len(cf.find_best_matches(history, "")))
print(cf.find_best_matches(history, "", empty_query="no_match"))

# %% [markdown]
# ---
# ## Part 3: History Index
#
# `ClipboardIndex` keeps entries in memory, caches their bonus vectors and
# breaks score ties newest first.

# %%
index = cf.ClipboardIndex(
    [
        cf.ClipboardEntry("hello", "2024-01-01T09:00:00Z"),
        cf.ClipboardEntry("hello", "2024-01-01T10:00:00Z"),
        cf.ClipboardEntry("/tmp/screenshot.png", "2024-01-01T11:00:00Z", kind="image"),
    ]
)

for r in index.search("h"):
    print(f"  #{r.id} [{r.score}] {r.text} ({r.created_at})")

# Images are only listed when nothing has been typed
for r in index.search(""):
    print(f"  #{r.id} {r.kind.value}: {r.text}")

# Filter by kind
print(f"Text: {index.count('text')}, images: {index.count('image')}")
print([e.content for e in index.recent(kind="image")])

# %%
index.save("history.pkl")
restored = cf.ClipboardIndex.load("history.pkl")
print(restored)

# %% [markdown]
# ---
# ## Part 4: Polars

# %%
df = pl.DataFrame(
    {
        "content": history,
        "created_at": [f"2024-01-01T09:0{i}:00Z" for i in range(len(history))],
    }
)

print(df.with_columns(score=pl.col("content").fzf.score("gs")))
print(cf.rank_dataframe(df, "gs", recency_column="created_at"))

# %% [markdown]
# ---
# ## Part 5: Configuration
#
# Batch scoring reads `CLIPFZF_MAX_WORKERS` and `CLIPFZF_PARALLEL_THRESHOLD`
# from the environment; `configure()` overrides them at runtime. The library
# logs through the `clipfzf` logger.

# %%
logging.basicConfig(level=logging.DEBUG)
cf.configure(max_workers=4, parallel_threshold=100)
big_history = [f"{text} #{i}" for i in range(50) for text in history]
print(len(batch.best_matches(big_history, "gsp", limit=None)))
cf.reset_config()
