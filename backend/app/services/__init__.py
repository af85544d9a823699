"""
Showcase Backend — Services Layer
=================================

Service Inventory:
    - MediaUploader (abstract): "bytes in, durable URL out"
    - CloudinaryUploader: MediaUploader backed by the Cloudinary Upload API
    - RecordStore: MongoDB insert/list plus connection lifecycle
    - SubmissionService: upload → assemble → persist workflow and listing
"""
