import unittest

from clonedetect.config import MSG_WHOIS_SKIPPED_VERIFIED, MSG_WHOIS_SKIPPED_LOW
from clonedetect.engine import CloneDetectionEngine, InputError, InputErrorReason
from clonedetect.models import ReferenceSet
from clonedetect.whois_cache import LookupCache

WHOIS_TEXT = "Domain Name: EXAMP1E.COM\nRegistrar: Example Registrar"


class FakeProvider:
    def __init__(self):
        self.calls = []

    def __call__(self, domain, timeout):
        self.calls.append(domain)
        return WHOIS_TEXT


class TestCloneDetectionEngine(unittest.TestCase):
    def setUp(self):
        self.provider = FakeProvider()
        self.cache = LookupCache(provider=self.provider, timeout=2.0)
        self.engine = CloneDetectionEngine(ReferenceSet(["example.com"]), self.cache)

    def tearDown(self):
        self.cache.shutdown()

    def test_verified_domain(self):
        v = self.engine.detect("http://example.com/path")
        self.assertFalse(v.is_clone)
        self.assertEqual(v.matching_accuracy, "100%")
        self.assertEqual(v.extracted_domain, "example.com")
        self.assertEqual(v.best_match_domain, "example.com")
        self.assertEqual(v.registration_info, MSG_WHOIS_SKIPPED_VERIFIED)
        self.assertEqual(self.provider.calls, [])

    def test_reference_members_never_clones(self):
        ref = ReferenceSet(["example.com", "paypal.com", "github.com"])
        engine = CloneDetectionEngine(ref, self.cache)
        for d in ref:
            for suffix in ["", "/", "/login?next=/home", "?q=1", "#frag"]:
                v = engine.detect(d + suffix)
                self.assertFalse(v.is_clone)
                self.assertEqual(v.matching_accuracy, "100%")
        self.assertEqual(self.provider.calls, [])

    def test_lookalike_is_clone_with_whois(self):
        v = self.engine.detect("examp1e.com")
        self.assertTrue(v.is_clone)
        self.assertEqual(v.best_match_domain, "example.com")
        self.assertEqual(v.matching_accuracy, "90.91%")
        self.assertEqual(v.registration_info, WHOIS_TEXT)
        self.assertEqual(self.provider.calls, ["examp1e.com"])

    def test_whois_cached_between_requests(self):
        self.engine.detect("https://examp1e.com/a")
        self.engine.detect("http://www.examp1e.com/b")
        self.assertEqual(self.provider.calls, ["examp1e.com"])

    def test_exactly_at_threshold_is_not_clone(self):
        engine = CloneDetectionEngine(ReferenceSet(["abcdef.com"]), self.cache)
        v = engine.detect("abcdxy.com")
        self.assertEqual(v.score, 80.0)
        self.assertFalse(v.is_clone)
        self.assertEqual(v.registration_info, MSG_WHOIS_SKIPPED_LOW)
        self.assertEqual(self.provider.calls, [])

    def test_just_above_threshold_is_clone(self):
        engine = CloneDetectionEngine(ReferenceSet(["abcdef.com"]), self.cache)
        v = engine.detect("abcdex.com")
        self.assertEqual(v.score, 90.0)
        self.assertTrue(v.is_clone)

    def test_custom_threshold(self):
        engine = CloneDetectionEngine(ReferenceSet(["example.com"]), self.cache, threshold=95.0)
        self.assertFalse(engine.detect("examp1e.com").is_clone)

    def test_empty_reference_set(self):
        engine = CloneDetectionEngine(ReferenceSet(), self.cache)
        v = engine.detect("example.com")
        self.assertIsNone(v.best_match_domain)
        self.assertEqual(v.score, 0.0)
        self.assertEqual(v.matching_accuracy, "0.00%")
        self.assertFalse(v.is_clone)
        self.assertEqual(v.registration_info, MSG_WHOIS_SKIPPED_LOW)

    def test_missing_url(self):
        for missing in ["", "   ", None]:
            with self.assertRaises(InputError) as ctx:
                self.engine.detect(missing)
            self.assertEqual(ctx.exception.reason, InputErrorReason.MISSING_URL)

    def test_invalid_url(self):
        with self.assertRaises(InputError) as ctx:
            self.engine.detect("not a url")
        self.assertEqual(ctx.exception.reason, InputErrorReason.INVALID_FORMAT)

    def test_non_string_url_is_invalid_format(self):
        for value in [123, ["example.com"], {"url": "example.com"}]:
            with self.assertRaises(InputError) as ctx:
                self.engine.detect(value)
            self.assertEqual(ctx.exception.reason, InputErrorReason.INVALID_FORMAT)

    def test_to_dict_shape(self):
        d = self.engine.detect("examp1e.com").to_dict()
        self.assertEqual(set(d), {"suspect_url", "extracted_domain", "best_match_domain",
                                  "matching_accuracy", "isClone", "whoisData"})
        self.assertEqual(d["suspect_url"], "examp1e.com")
        self.assertIs(d["isClone"], True)


if __name__ == "__main__":
    unittest.main()
