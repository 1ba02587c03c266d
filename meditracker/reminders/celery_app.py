from celery import Celery
from kombu import Queue
from .config import settings


celery_app = Celery(
    "meditracker_reminders",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND or None,
)

celery_app.conf.update(
    task_acks_late=True,
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    worker_prefetch_multiplier=1,
    worker_concurrency=settings.WORKER_CONCURRENCY,
    task_default_queue=settings.QUEUE,
    task_queues=(Queue(settings.QUEUE, durable=True),),
    include=["meditracker.reminders.tasks"],
    timezone="UTC",
    enable_utc=True,
)

# Celery Beat schedule for periodic scanning
celery_app.conf.beat_schedule = {
    "scan-and-dispatch": {
        "task": "reminders.scan_and_dispatch",
        "schedule": settings.SCAN_INTERVAL_SECONDS,
    },
}
