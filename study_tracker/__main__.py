# study_tracker/__main__.py

from .tracker_app import main

if __name__ == "__main__":
    main()
