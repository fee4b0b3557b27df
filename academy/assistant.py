import logging
from typing import Callable, Dict, List

from django.conf import settings
from langchain_core.prompts import ChatPromptTemplate

from . import cache
from .exceptions import UpstreamError
from .models import Blog, Category, Lesson, SpecializedCourse

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "I'm sorry, I couldn't process that request."

SYSTEM_PROMPT = (
    "You are an AI Assistant for MY Quran Guide.\n"
    "The academy offers various courses including Tajweed, Tafsir, and Hifz.\n"
    "Current categories: {categories}.\n"
    "Specialized Courses: {courses}.\n"
    "Some available lessons: {lessons}.\n"
    "Recent Blog Posts: {blogs}.\n"
    "User Role: {role}.\n\n"
    "Instructions:\n"
    "- Provide helpful, respectful, and accurate information about Quran learning.\n"
    "- If the user asks about lessons or courses, mention relevant ones from the list above.\n"
    "- Keep answers concise but informative.\n"
    "- Use a warm, encouraging tone.\n"
    '- Refer to the academy as "MY Quran Guide".'
)

# (question, role, context) -> answer text
Generator = Callable[[str, str, Dict[str, List[str]]], str]


class AssistantEngine:
    def __init__(self, generator: Generator | None = None) -> None:
        self._generator = generator
        self._llm = None
        self._inflight = cache.InflightRegistry()

    def _init_llm(self) -> None:
        if self._llm is not None:
            return
        api_key = settings.GROQ_API_KEY
        if not api_key:
            raise UpstreamError("GROQ_API_KEY is required for AI features")
        from langchain_groq import ChatGroq

        self._llm = ChatGroq(api_key=api_key, model=settings.GROQ_MODEL, temperature=0.2)

    def build_context(self) -> Dict[str, List[str]]:
        """Snapshot of the catalog the model may refer to."""
        lessons = Lesson.objects.filter(status=Lesson.Status.PUBLISHED).order_by("id")
        return {
            "lessons": list(lessons.values_list("title", flat=True)[: settings.AI_CONTEXT_LESSONS]),
            "categories": list(Category.objects.order_by("id").values_list("name", flat=True)),
            "blogs": list(Blog.objects.order_by("id").values_list("title", flat=True)[: settings.AI_CONTEXT_BLOGS]),
            "courses": list(SpecializedCourse.objects.order_by("id").values_list("title", flat=True)),
        }

    def _llm_generate(self, question: str, role: str, context: Dict[str, List[str]]) -> str:
        self._init_llm()
        prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT),
            ("user", "{question}"),
        ])
        chain = prompt | self._llm
        llm_resp = chain.invoke({
            "question": question,
            "role": role,
            "categories": ", ".join(context["categories"]),
            "courses": ", ".join(context["courses"]),
            "lessons": ", ".join(context["lessons"]),
            "blogs": ", ".join(context["blogs"]),
        })
        return (getattr(llm_resp, "content", None) or "").strip()

    def generate(self, question: str, role: str) -> str:
        context = self.build_context()
        generator = self._generator or self._llm_generate
        try:
            text = generator(question, role, context)
        except UpstreamError:
            raise
        except Exception as e:
            logger.exception("AI generation failed")
            raise UpstreamError() from e
        if not isinstance(text, str) or not text.strip():
            return FALLBACK_RESPONSE
        return text

    def _generate_and_store(self, question: str, role: str) -> str:
        # A leader that finished just before us may have stored the answer
        cached = cache.lookup(question, role)
        if cached is not None:
            return cached
        text = self.generate(question, role)
        cache.store(question, role, text)
        return text

    def answer(self, question: str, role=None) -> str:
        role = cache.normalize_role(role)
        cached = cache.lookup(question, role)
        if cached is not None:
            logger.debug("AI cache hit for role=%s", role)
            return cached

        if not settings.AI_COALESCE_INFLIGHT:
            return self._generate_and_store(question, role)
        return self._inflight.run(
            (question, role), lambda: self._generate_and_store(question, role)
        )


assistant = AssistantEngine()
