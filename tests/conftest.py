"""Shared fixtures for the doc-checker test suite."""

from __future__ import annotations

import pytest

POSTGRES_GUIDE = """\
# PostgreSQL Command Guide

## Table of Contents

- [Installation](#installation)
- [Connecting](#connecting)
- [Creating Tables](#creating-tables)
- [JSON Support](#json-support)

## Installation

Install the server and client packages:

```bash
sudo apt-get install postgresql postgresql-contrib
```

## Connecting

```bash
psql -U postgres -h localhost
```

## Creating Tables

```sql
CREATE TABLE users (
    id SERIAL PRIMARY KEY,
    email TEXT UNIQUE NOT NULL
);
```

## JSON Support

Query a key from a `jsonb` column, see [Creating Tables](#creating-tables):

```sql
SELECT data->>'name' FROM events;
```

```text
 name
------
 demo
```
"""


@pytest.fixture()
def postgres_guide() -> str:
    """A well-formed reference guide that produces no issues."""
    return POSTGRES_GUIDE
