import json

from django.core.management.base import BaseCommand, CommandError

from jwt_webhooks.router import get_router
from jwt_webhooks.types import EventKind, Success


class Command(BaseCommand):
    help = "Send one signed webhook for a client event using the configured endpoints."

    def add_arguments(self, parser):
        parser.add_argument(
            "event",
            choices=[event.value for event in EventKind],
            help="Event kind to dispatch.",
        )
        parser.add_argument(
            "--record",
            default=None,
            help='Record as a JSON object, e.g. \'{"client_id": 42, "email": "a@b.c"}\'.',
        )
        parser.add_argument(
            "--field",
            action="append",
            default=None,
            metavar="KEY=VALUE",
            help="Record field; repeatable. Overrides keys from --record.",
        )

    def handle(self, *args, **options):
        record = self._parse_record(options.get("record"))
        for item in options.get("field") or []:
            key, sep, value = item.partition("=")
            if not sep or not key.strip():
                raise CommandError(f"Invalid --field '{item}'; expected KEY=VALUE")
            record[key.strip()] = value

        try:
            router = get_router()
        except Exception as exc:
            raise CommandError(f"Webhooks are not configured: {exc}")

        event = EventKind(options["event"])
        if router.handler_for(event) is None:
            raise CommandError(f"No webhook endpoint is enabled for '{event.value}'")

        result = router.dispatch(event, record)
        if isinstance(result, Success):
            self.stdout.write(
                self.style.SUCCESS(f"Status {result.status}: {result.body}")
            )
            return
        raise CommandError(f"{type(result).__name__}: {getattr(result, 'message', result)}")

    def _parse_record(self, raw):
        if not raw:
            return {}
        try:
            record = json.loads(raw)
        except ValueError as exc:
            raise CommandError(f"--record is not valid JSON: {exc}")
        if not isinstance(record, dict):
            raise CommandError("--record must be a JSON object")
        return record
