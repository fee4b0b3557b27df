import threading
import time
from datetime import timedelta

import pytest

from academy import cache
from academy.assistant import FALLBACK_RESPONSE, AssistantEngine
from academy.exceptions import UpstreamError
from academy.models import AICacheEntry, Blog, Lesson, SpecializedCourse


class CountingGenerator:
    def __init__(self, text="Tajweed is the set of rules for reciting the Quran."):
        self.text = text
        self.calls = 0
        self.contexts = []

    def __call__(self, question, role, context):
        self.calls += 1
        self.contexts.append(context)
        return self.text


class FailingGenerator:
    def __init__(self):
        self.calls = 0

    def __call__(self, question, role, context):
        self.calls += 1
        raise RuntimeError("provider down")


@pytest.mark.parametrize("role,expected", [(None, "visitor"), ("", "visitor"), ("visitor", "visitor"), ("student", "student")])
def test_normalize_role(role, expected):
    assert cache.normalize_role(role) == expected


@pytest.mark.django_db
def test_lookup_returns_stored_answer():
    assert cache.lookup("What is Tajweed?", "student") is None
    cache.store("What is Tajweed?", "student", "Rules of recitation.")
    assert cache.lookup("What is Tajweed?", "student") == "Rules of recitation."


@pytest.mark.django_db
def test_anonymous_and_visitor_share_entries():
    cache.store("Hi", None, "Welcome!")
    assert cache.lookup("Hi", "visitor") == "Welcome!"
    assert AICacheEntry.objects.get().user_role == "visitor"


@pytest.mark.django_db
@pytest.mark.parametrize("question,role", [
    ("what is tajweed?", "student"),
    ("What is Tajweed? ", "student"),
    ("What  is Tajweed?", "student"),
    ("What is Tajweed?", "teacher"),
    ("What is Tajweed?", None),
])
def test_lookup_is_exact_on_both_fields(question, role):
    cache.store("What is Tajweed?", "student", "Rules of recitation.")
    assert cache.lookup(question, role) is None


@pytest.mark.django_db
def test_latest_entry_wins():
    cache.store("Q", "student", "first")
    cache.store("Q", "student", "second")
    assert AICacheEntry.objects.count() == 2
    assert cache.lookup("Q", "student") == "second"


@pytest.mark.django_db
def test_ttl_hides_old_entries(settings):
    entry = cache.store("Q", "student", "old")
    settings.AI_CACHE_TTL = 60
    assert cache.lookup("Q", "student") == "old"
    AICacheEntry.objects.filter(id=entry.id).update(created_at=entry.created_at - timedelta(seconds=120))
    assert cache.lookup("Q", "student") is None


@pytest.mark.django_db
def test_max_entries_prunes_oldest(settings):
    settings.AI_CACHE_MAX_ENTRIES = 2
    for i in range(4):
        cache.store(f"Q{i}", "student", f"A{i}")
    assert AICacheEntry.objects.count() == 2
    assert cache.lookup("Q0", "student") is None
    assert cache.lookup("Q3", "student") == "A3"


@pytest.mark.django_db
def test_cache_hit_skips_generator():
    generator = CountingGenerator()
    engine = AssistantEngine(generator=generator)
    cache.store("What is Tajweed?", "student", "cached answer")

    assert engine.answer("What is Tajweed?", "student") == "cached answer"
    assert generator.calls == 0


@pytest.mark.django_db
def test_miss_calls_generator_once_and_stores():
    generator = CountingGenerator()
    engine = AssistantEngine(generator=generator)

    first = engine.answer("What is Tajweed?", "student")
    second = engine.answer("What is Tajweed?", "student")

    assert first == second == generator.text
    assert generator.calls == 1
    assert AICacheEntry.objects.filter(question="What is Tajweed?", user_role="student").count() == 1


@pytest.mark.django_db
def test_empty_generation_stores_fallback():
    engine = AssistantEngine(generator=CountingGenerator(text="   "))
    assert engine.answer("Hello?") == FALLBACK_RESPONSE
    assert cache.lookup("Hello?", None) == FALLBACK_RESPONSE


@pytest.mark.django_db
def test_generator_failure_is_upstream_error_and_not_cached():
    generator = FailingGenerator()
    engine = AssistantEngine(generator=generator)
    with pytest.raises(UpstreamError):
        engine.answer("Q", "student")
    assert AICacheEntry.objects.count() == 0

    # No negative caching: the next request tries again
    with pytest.raises(UpstreamError):
        engine.answer("Q", "student")
    assert generator.calls == 2


@pytest.mark.django_db
def test_missing_api_key_is_upstream_error(settings):
    settings.GROQ_API_KEY = None
    with pytest.raises(UpstreamError):
        AssistantEngine().answer("Q")


@pytest.mark.django_db
def test_context_snapshot_is_bounded(make_lesson):
    for i in range(12):
        make_lesson(f"lesson-{i}")
    make_lesson("secret-draft", status=Lesson.Status.DRAFT)
    for i in range(7):
        Blog.objects.create(title=f"Blog {i}", slug=f"blog-{i}", content="...")
    SpecializedCourse.objects.create(title="Ijazah Program", description="...", features=["1:1"])

    context = AssistantEngine().build_context()

    assert len(context["lessons"]) == 10
    assert "Secret Draft" not in context["lessons"]
    assert context["categories"] == ["Tajweed", "Tafsir", "Hifz"]
    assert len(context["blogs"]) == 5
    assert context["courses"] == ["Ijazah Program"]


@pytest.mark.django_db
def test_generator_receives_context(make_lesson):
    make_lesson("makharij-basics")
    generator = CountingGenerator()
    AssistantEngine(generator=generator).answer("Where do I start?", "student")
    assert generator.contexts[0]["lessons"] == ["Makharij Basics"]


def test_inflight_registry_joins_concurrent_callers():
    registry = cache.InflightRegistry()
    started = threading.Event()
    release = threading.Event()
    calls = []
    results = []

    def compute():
        calls.append(1)
        started.set()
        release.wait(5)
        return "shared answer"

    def worker():
        results.append(registry.run(("Q", "student"), compute))

    leader = threading.Thread(target=worker)
    leader.start()
    assert started.wait(5)
    follower = threading.Thread(target=worker)
    follower.start()
    time.sleep(0.2)
    release.set()
    leader.join(5)
    follower.join(5)

    assert results == ["shared answer", "shared answer"]
    assert len(calls) == 1
    assert len(registry) == 0


def test_inflight_registry_propagates_errors_and_clears():
    registry = cache.InflightRegistry()

    def boom():
        raise UpstreamError()

    with pytest.raises(UpstreamError):
        registry.run(("Q", "visitor"), boom)
    assert len(registry) == 0
    assert registry.run(("Q", "visitor"), lambda: "ok") == "ok"


def test_inflight_registry_keys_are_independent():
    registry = cache.InflightRegistry()
    assert registry.run(("Q", "student"), lambda: "a") == "a"
    assert registry.run(("Q", "teacher"), lambda: "b") == "b"


@pytest.mark.django_db
def test_late_caller_reuses_answer_stored_by_finished_leader(monkeypatch):
    generator = CountingGenerator()
    engine = AssistantEngine(generator=generator)
    real_lookup = cache.lookup
    lookups = []

    def lookup_racing_leader(question, role=None):
        lookups.append(question)
        if len(lookups) == 1:
            # Another request stores its answer right after our first miss
            cache.store(question, role, "leader answer")
            return None
        return real_lookup(question, role)

    monkeypatch.setattr(cache, "lookup", lookup_racing_leader)

    assert engine.answer("Q", "student") == "leader answer"
    assert generator.calls == 0
    assert AICacheEntry.objects.count() == 1
