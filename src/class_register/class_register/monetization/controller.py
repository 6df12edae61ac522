from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ads/status", methods=["GET"], endpoint="ads_status")
    def ads_status():
        session = container.ad_session
        if session is None:
            return jsonify({"success": True, "enabled": False})
        return jsonify(
            {
                "success": True,
                "enabled": True,
                "consent_granted": session.consent_granted,
                "initialized": session.ads_initialized,
                "interstitials_shown": session.shown_count,
                "can_show_interstitial": session.can_show_interstitial(),
            }
        )

    @app.route("/api/ads/consent", methods=["POST"], endpoint="ads_consent")
    def ads_consent():
        session = container.ad_session
        if session is None:
            return jsonify({"success": False, "message": "Ads are disabled"}), 409

        data = request.get_json(silent=True) or {}
        if data.get("granted"):
            session.grant_consent()
            session.mark_initialized()
        else:
            session.revoke_consent()
        return jsonify({"success": True, "consent_granted": session.consent_granted})
