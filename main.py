
"""
Entry point script for the rephraser application.
This allows running the app directly from the project root.
"""
from rephraser.main import main

if __name__ == "__main__":
    main()
