PROJECT_VERSION = "0.1.0"


if __name__ == "__main__":
    from jlview.app import main

    main()
