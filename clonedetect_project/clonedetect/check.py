# clonedetect/check.py
import argparse
import pandas as pd
from clonedetect.config import REFERENCE_DOMAINS_PATH, SIMILARITY_THRESHOLD, WHOIS_TIMEOUT
from clonedetect.domain_utils import load_reference_domains
from clonedetect.engine import CloneDetectionEngine, InputError
from clonedetect.whois_cache import LookupCache

VERDICT_COLUMNS = ["domain", "best_match_domain", "matching_accuracy", "is_clone", "whois", "error"]


def check_single(url, engine):
    try:
        v = engine.detect(url)
    except InputError as e:
        print(e.message)
        return
    label = "Clone" if v.is_clone else "Not a clone"
    print(f"Verdict: {label} ({v.extracted_domain} ~ {v.best_match_domain}, "
          f"accuracy={v.matching_accuracy})")
    if v.is_clone:
        print(v.registration_info)


def _row_verdict(url, engine):
    try:
        v = engine.detect(url)
    except InputError as e:
        return [None, None, None, None, None, e.message]
    return [v.extracted_domain, v.best_match_domain, v.matching_accuracy,
            v.is_clone, v.registration_info, None]


def check_csv(path, engine, out_path):
    df = pd.read_csv(path)
    if "url" not in df.columns:
        raise SystemExit("❌ CSV must contain a 'url' column.")
    urls = df["url"].fillna("").astype(str)
    rows = [_row_verdict(u, engine) for u in urls]

    out = pd.concat([df, pd.DataFrame(rows, columns=VERDICT_COLUMNS, index=df.index)], axis=1)
    if out_path:
        out.to_csv(out_path, index=False)
        print(f"💾 Saved verdicts to {out_path}")
    else:
        print(out.head(10))
    return out


def main(argv=None):
    ap = argparse.ArgumentParser(description="Check URLs against known legitimate domains.")
    ap.add_argument("url", nargs="?")
    ap.add_argument("--csv")
    ap.add_argument("--out")
    ap.add_argument("--domains", default=REFERENCE_DOMAINS_PATH)
    ap.add_argument("--threshold", type=float, default=SIMILARITY_THRESHOLD)
    ap.add_argument("--timeout", type=float, default=WHOIS_TIMEOUT)
    args = ap.parse_args(argv)

    reference = load_reference_domains(args.domains)
    cache = LookupCache(timeout=args.timeout)
    engine = CloneDetectionEngine(reference, cache, threshold=args.threshold)
    try:
        if args.csv:
            check_csv(args.csv, engine, args.out)
        elif args.url:
            check_single(args.url, engine)
        else:
            ap.print_help()
    finally:
        cache.shutdown()


if __name__ == "__main__":
    main()
