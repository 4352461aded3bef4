from fastapi import Request

from .services.content_generation import ContentGenerator
from .services.task_registry import GenerationTaskRegistry


def get_content_generator(request: Request) -> ContentGenerator:
    return request.app.state.content_generator


def get_task_registry(request: Request) -> GenerationTaskRegistry:
    return request.app.state.content_generator.registry
