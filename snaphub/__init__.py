"""SnapHub API: photo uploads, search and rated comments."""
