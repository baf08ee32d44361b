"""
AirAlert — WAQI station monitor with Bark push alerts.

Components:
    - config: environment-driven Settings
    - ingestion: WAQI feed client and snapshot model
    - classification: six-tier AQI severity classifier
    - rules: alert text for each severity tier
    - notify: Bark push-notification sender
    - main: polling loop entry point
"""
