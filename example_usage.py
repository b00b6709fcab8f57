#!/usr/bin/env python3
"""
Basic usage examples for the URI signer library.

Signs a download link, verifies it, and shows how tampering, expiry and
inbound requests are handled. Optionally fetches the signed link from a
server when a base URL is given on the command line.
"""

import logging
import sys
import time

import requests

from uri_signer import (
    UriSigner,
    SignedURIAuth,
    UriSignerError,
    VerificationStatus
)


def main():
    """Run basic usage examples."""

    logging.basicConfig(level=logging.DEBUG, format="   [%(name)s] %(message)s")

    secret_key = "uri-signer-demo-secret"

    print("=== URI Signer Basic Usage Examples ===\n")

    print("1. Creating signer...")
    signer = UriSigner(secret_key, expiration=600)
    print(f"   Signer: {signer}\n")

    print("2. Signing a URI...")
    uri = "https://downloads.example.com/files/report.pdf?user=42&format=pdf"
    signed = signer.sign(uri)
    print(f"   URI:    {uri}")
    print(f"   Signed: {signed}")
    print(f"   Verification: {'✓ Valid' if signer.check(signed) else '✗ Invalid'}")
    print()

    print("3. Tampering with the signed URI...")
    tampered = signed.replace("user=42", "user=43")
    result = signer.verify(tampered)
    print(f"   Tampered: {tampered}")
    print(f"   Result: {result}")
    print()

    print("4. Expired link...")
    short = signer.sign(uri, 1)
    time.sleep(2)
    result = signer.verify(short)
    if result.status is VerificationStatus.EXPIRED:
        print(f"   ✓ Rejected as expired: {result.reason}")
    else:
        print(f"   ✗ Unexpected result: {result}")
    print()

    print("5. Strict mode...")
    try:
        signer.check("https://downloads.example.com/files/report.pdf", throw_on_error=True)
    except UriSignerError as e:
        print(f"   ✓ {type(e).__name__}: {e}")
    print()

    print("6. Checking an inbound WSGI request...")
    query = signed.partition('?')[2]
    environ = {
        'wsgi.url_scheme': 'https',
        'HTTP_HOST': 'downloads.example.com',
        'SCRIPT_NAME': '',
        'PATH_INFO': '/files/report.pdf',
        'QUERY_STRING': query,
    }
    print(f"   Verification: {'✓ Valid' if signer.check_request(environ) else '✗ Invalid'}")
    print()

    if len(sys.argv) > 1:
        base_url = sys.argv[1].rstrip('/')
        print(f"7. Fetching a signed link from {base_url}...")
        try:
            response = requests.get(f"{base_url}/files/report.pdf", auth=SignedURIAuth(signer), timeout=30)
            print(f"   URL: {response.request.url}")
            print(f"   Status: {response.status_code}")
        except requests.RequestException as e:
            print(f"   ✗ Request error: {e}")
        print()

    print("=== Examples completed ===")


if __name__ == "__main__":
    main()
