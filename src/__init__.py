# BeFrames - Blender render job compiler for farm submission
"""
This package turns Blender job settings into render farm tasks.

Architecture:
- beframes: the job compiler (validation, output paths, frame chunking,
  task authoring) plus its CLI and scheduler client
- beframes_service: stateless HTTP compile service for the Blender add-on
- Compiled jobs are handed to the farm scheduler, which runs Blender on workers
"""

__version__ = "0.1.0"
