#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

import yaml

from cms.auth.passwords import hash_password
from cms.config import users_path


def main() -> None:
    path = users_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        raw = {}

    if not isinstance(raw, dict):
        raise SystemExit(f"{path} does not contain a mapping of users")

    username = input("Username: ").strip()
    if not username:
        raise SystemExit("Username cannot be empty")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    users = raw.get("users")
    if isinstance(users, dict):
        users[username] = {"password_hash": hash_password(pw1)}
    else:
        raw[username] = hash_password(pw1)

    path.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")
    print(f"OK -> {path}")


if __name__ == "__main__":
    main()
