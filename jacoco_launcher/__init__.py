"""Run a Java service under the JaCoCo agent, then report and upload coverage."""

__version__ = "0.1.0"
