import os
import argparse
import concurrent.futures
from uuid import uuid4

import jwt
import requests

BASE = os.environ.get("ARTSHOP_BASE", "http://127.0.0.1:5000")
SECRET = os.environ.get("ADMIN_JWT_SECRET", "change-this-secret")


def admin_token():
    # local testing only: real admin tokens come from the identity provider
    return jwt.encode({"role": "admin", "sub": "concurrency-tool"}, SECRET, algorithm="HS256")


def create_task(i, token, prefix):
    payload = {
        "title": f"{prefix} item {i}",
        "price": 100 + i,
        "category": "crafts",
    }
    headers = {"Authorization": f"Bearer {token}"}
    try:
        r = requests.post(f"{BASE}/products/addProducts", json=payload, headers=headers, timeout=20)
        return (i, r.status_code, r.json())
    except Exception as e:
        return (i, "ERR", str(e))


def run_create_concurrent(workers):
    token = admin_token()
    prefix = f"concurrency-{uuid4().hex[:6]}"
    print(f"Running create test: workers={workers}, prefix={prefix}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, token, prefix) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r[:2])
    ids = sorted(r[2]["data"]["productId"] for r in results if r[1] == 201)
    print("Assigned product ids:", ids)
    print("Distinct:", len(ids) == len(set(ids)))
    print("Contiguous:", ids == list(range(ids[0], ids[0] + len(ids))) if ids else True)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent admin product creations.")
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args()
    run_create_concurrent(args.workers)
