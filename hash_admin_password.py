#!/usr/bin/env python3
"""
Generate a password hash for a staff portal account.

This script DOES NOT store anything. It prints a PBKDF2-HMAC-SHA256 hash
(format "salthex$hashhex") or, with --username, a ready-made
ADMIN_ACCOUNTS value to paste into the environment.

Usage:
    python hash_admin_password.py --username Jessa --role user
    python hash_admin_password.py --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import json
import sys

from salon_booking_api.app.core.passwords import hash_password


def main():
    ap = argparse.ArgumentParser(description="Hash a staff portal password.")
    ap.add_argument("--username", help="Print an ADMIN_ACCOUNTS entry for this username instead of the bare hash")
    ap.add_argument("--role", default="user", choices=["user", "admin"], help="Role for the ADMIN_ACCOUNTS entry")
    ap.add_argument("--password", help="Password to hash. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Enter password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)
    if not args.password and getpass.getpass("Repeat password: ") != password:
        print("[!] Passwords do not match.", file=sys.stderr)
        sys.exit(1)

    hashed = hash_password(password)
    if args.username:
        print(json.dumps({args.username: {"password_hash": hashed, "role": args.role}}))
    else:
        print(hashed)


if __name__ == "__main__":
    main()
