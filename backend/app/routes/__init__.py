"""
Showcase Backend — API Routes Package
=====================================

Route Inventory:
    - uploads.py: POST /uploads   (store a submission with its images)
                  GET  /data      (list every stored submission)
    - health.py:  GET  /health    (service health check)

Routes stay thin: they read the request, call SubmissionService and return
the response model. Failures are labelled with reported_as() and serialised
by the global handler in main.py.
"""
