"""Build-time generator for the static country/time zone dataset module."""
