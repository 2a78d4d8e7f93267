from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import DateRange, now_local, parse_range_bound
from ..common.validators import require_valid_range
from ..core.enums import PeriodGrouping
from ..core.exceptions import DataSourceError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    defaults = container.analytics_defaults

    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _date_range_from_args() -> DateRange:
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        if not start_s or not end_s:
            raise ValidationError("startDate and endDate are required query parameters")
        try:
            date_range = DateRange.of(parse_range_bound(start_s), parse_range_bound(end_s))
        except ValueError:
            raise ValidationError("startDate and endDate must be ISO dates (YYYY-MM-DD)") from None
        return require_valid_range(date_range)

    def _number_arg(name: str, default, cast):
        raw = request.args.get(name)
        if raw is None or raw == "":
            return default
        try:
            return cast(raw)
        except ValueError:
            raise ValidationError(f"{name} must be a number") from None

    @app.route("/analytics/<org_id>", methods=["GET"], endpoint="attendance_analytics")
    def attendance_analytics(org_id: str):
        try:
            date_range = _date_range_from_args()
            group_by = PeriodGrouping.parse(request.args.get("groupBy"))
            standard_hours = _number_arg("standardHours", defaults.standard_hours_per_day, float)
            overtime_threshold = _number_arg("overtimeThreshold", defaults.overtime_threshold_hours, float)
            consecutive_threshold = _number_arg("consecutiveThreshold", defaults.consecutive_threshold, int)

            report = container.analytics_service.build_dashboard(
                org_id,
                date_range,
                group_by=group_by,
                standard_hours_per_day=standard_hours,
                overtime_threshold_hours=overtime_threshold,
                consecutive_threshold=consecutive_threshold,
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except DataSourceError as e:
            return _error(str(e), 503)
        except Exception:
            logger.exception("Analytics request failed for organization %s", org_id)
            return _error("Internal error while computing analytics", 500)

        payload = {"success": True, **report.to_dict()}
        payload["parameters"] = {
            "groupBy": group_by.value,
            "standardHours": standard_hours,
            "overtimeThreshold": overtime_threshold,
            "consecutiveThreshold": consecutive_threshold,
        }
        payload["generatedAt"] = now_local().isoformat()
        return jsonify(payload)

    @app.route("/analytics/<org_id>/export", methods=["GET"], endpoint="attendance_analytics_export")
    def attendance_analytics_export(org_id: str):
        try:
            date_range = _date_range_from_args()
            if request.args.get("format", "csv") != "csv":
                raise ValidationError("Only CSV format is currently supported")
            content = container.analytics_service.export_flat_file(org_id, date_range)
        except ValidationError as e:
            return _error(str(e), 400)
        except DataSourceError as e:
            return _error(str(e), 503)
        except Exception:
            logger.exception("CSV export failed for organization %s", org_id)
            return _error("Internal error while exporting attendance", 500)

        filename = f"attendance_report_{request.args['startDate']}_to_{request.args['endDate']}.csv"
        return app.response_class(
            content.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
