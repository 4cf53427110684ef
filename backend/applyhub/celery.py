import os
from celery import Celery
from celery.schedules import crontab

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'applyhub.settings')
app = Celery('applyhub')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

# Sweep auto-apply logs that never reached a terminal status
app.conf.beat_schedule = {
    'expire-stale-auto-apply-logs': {
        'task': 'careers.tasks.expire_stale_auto_apply_logs',
        'schedule': crontab(minute='*/10'),
    },
}
