"""Build action construction for llvm_min_tblgen modules."""
