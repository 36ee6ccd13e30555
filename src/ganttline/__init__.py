"""ganttline - Gantt timeline editor."""
